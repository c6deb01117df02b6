"""Domain-specific exceptions — framework-independent."""


class DomainError(Exception):
    """Base class for all errors raised by the article core."""


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist (or is not visible to the caller)."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(DomainError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConcurrentModificationError(DomainError):
    """Raised when a conditional write loses a race against another writer."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} '{entity_id}' was modified concurrently, reload and retry"
        )


class DomainValidationError(DomainError):
    """Raised when a field value is malformed or out of range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidStateTransitionError(DomainError):
    """Raised when a lifecycle transition is not allowed from the current state."""

    def __init__(self, current: str, target: str, reason: str = ""):
        self.current = current
        self.target = target
        self.reason = reason
        message = f"Cannot move article from '{current}' to '{target}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ServiceUnavailableError(DomainError):
    """Raised when the persistence collaborator cannot be reached."""

    def __init__(self, message: str = "Storage backend unavailable"):
        self.message = message
        super().__init__(message)
