"""
Paquete principal de la aplicación.

Este paquete contiene todos los módulos y paquetes que conforman la API de usuarios.
"""

from typing import List

__all__: List[str] = []
