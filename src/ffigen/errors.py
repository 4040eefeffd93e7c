# errors.py


class SignatureError(Exception):
    """Base class for every fatal error raised while transforming natives."""

    def __init__(self, message, function=None, param=None):
        self.function = function
        self.param = param
        location = function or ""
        if param:
            location = f"{location}.{param}" if location else param
        super().__init__(f"{message} (in {location})" if location else message)


class UnknownNativeTypeError(SignatureError):
    pass


class BufferConventionError(SignatureError):
    """Output string buffer is not followed by a matching size parameter."""


class MissingDefaultSizeError(SignatureError):
    pass


class AmbiguousNameError(SignatureError):
    """No known callee prefix to derive a composite type name from."""


class CompositeAliasError(SignatureError):
    pass
