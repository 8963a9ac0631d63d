"""Blueprint exception hierarchy"""


class BlueprintError(Exception):
    """Base class for all Blueprint errors"""


class SchemaNotFoundError(BlueprintError):
    """No schema is registered under the requested key"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Schema '{key}' not found")


class SchemaClassMissingError(BlueprintError):
    """The registered schema class reference cannot be loaded"""

    def __init__(self, key: str, reference: str):
        self.key = key
        self.reference = reference
        super().__init__(f"Schema class '{reference}' for '{key}' does not exist")


class CollectionUnloadableError(BlueprintError):
    """A schema's collection (or its model) cannot be loaded"""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        message = f"Collection '{reference}' cannot be loaded"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidFieldConfigError(BlueprintError, ValueError):
    """A field was declared with an invalid configuration"""


class RegistryFrozenError(BlueprintError):
    """A registry was modified after it was frozen"""


class FieldFrozenError(BlueprintError):
    """A field definition was modified after its schema registered"""


class InvalidTransitionError(BlueprintError):
    """A client form moved between states in an order that is not allowed"""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move form from '{current}' to '{target}'")
