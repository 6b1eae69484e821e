"""Domain errors raised by use cases and translated to HTTP by the API layer."""


class DomainError(ValueError):
    pass


class NotFoundError(DomainError):
    def __init__(self, entity: str, key):
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class ConflictError(DomainError):
    pass


class ValidationError(DomainError):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
