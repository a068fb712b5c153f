"""Errors raised by the Confract pipeline."""


class ConfractError(Exception):
    """Base class for every Confract error."""


class EmptyInputError(ConfractError, ValueError):
    """Input is blank or yields no usable lines after segmentation."""


class EmbeddingUnavailableError(ConfractError, RuntimeError):
    """The embedding model could not be loaded or failed while encoding."""


class MalformedExistingDocumentError(ConfractError, ValueError):
    """An existing document has no well-formed sections list."""
