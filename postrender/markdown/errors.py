# postrender/markdown/errors.py


class RenderError(Exception):
    """Base class for rendering pipeline errors."""


class TableParseError(RenderError):
    """A table run held nothing that could be laid out as a grid.

    Recovered by the document renderer, which emits the run as paragraphs.
    """


class InlineTransformError(RenderError):
    """The inline serializer met a node it does not know how to emit.

    This is a pipeline defect, not bad input, so it is never caught inside
    the pipeline.
    """
