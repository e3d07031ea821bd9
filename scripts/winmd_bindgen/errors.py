"""
Error types

Every error raised while reading metadata or emitting declarations is fatal:
generation stops at the first one and no output file is written.
"""


class GenerationError(RuntimeError):
    """Base class for all fatal generation errors"""


class MetadataError(GenerationError):
    """The decoded metadata has a shape the generator does not understand"""


class TypeMappingError(GenerationError):
    """A metadata type has no Odin equivalent"""


class LayoutError(GenerationError):
    """A struct field cannot be laid out faithfully"""


class AbiFixupError(GenerationError):
    """A struct-returning method cannot be rewritten to the out-parameter form"""
