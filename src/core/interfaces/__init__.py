"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- El doctor depende de registros de módulos/paquetes y de un ejecutor de procesos
  abstractos, así se puede testear sin tocar el sistema real.
"""
