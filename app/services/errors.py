class ValidationError(Exception):
    """Entrada obligatoria ausente o inválida (HTTP 400)"""


class StoreError(Exception):
    """Fallo de persistencia en MongoDB (HTTP 500, detalle sólo en el log)"""
