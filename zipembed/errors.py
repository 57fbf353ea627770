class ZipEmbedError(Exception):
    """Base class for zipembed-specific errors."""


class UsageError(ZipEmbedError):
    pass


# Archive assembly
class DuplicateEntryError(ZipEmbedError):
    pass


class ArchiveClosedError(ZipEmbedError):
    pass


class ContainerFormatError(ZipEmbedError):
    pass


# Literal decoding
class LiteralDecodeError(ZipEmbedError):
    pass


class EscapeSequenceError(LiteralDecodeError):
    pass


class Base64AlphabetError(LiteralDecodeError):
    pass
