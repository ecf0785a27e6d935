class WadError(Exception):
    """Base class for wadmake-specific errors."""


# Decoding
class FormatError(WadError):
    pass


# Encoding
class EncodeError(WadError):
    pass


# Directory arguments
class ArgumentError(WadError):
    def __init__(self, param: str, message: str):
        super().__init__(f"bad argument '{param}' ({message})")
        self.param = param
