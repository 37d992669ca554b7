"""Core del cliente: configuración, resolución de destinos y servicios.

Por qué:
- No depende de la CLI; los servicios pueden reutilizarse desde tests u
  otros puntos de entrada.
"""
