class NotFoundError(Exception):
    """
    Error de dominio para búsquedas sin resultados.
    main.py lo convierte en un 404.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
