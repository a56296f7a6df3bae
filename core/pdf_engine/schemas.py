"""
PdfTextBlock Pydantic Schemas
Validation of tagged block dictionaries ({"type": "paragraph", "text": "..."}).

Shared by the HTTP surface, the CLI and PdfExporter, so every entry
point accepts and rejects exactly the same payloads.
"""

from typing import Annotated, Any, Dict, Iterable, List, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from .blocks import (
    Block, BlockKind, Column, TextBlock, RightAlignBlock, ThreeColumnsBlock, SpacerBlock,
    COLUMN_COUNT,
)


# ==================== CONSTANTS ====================

MAX_SPACER_SIZE = 1000  # points


# ==================== BLOCK SCHEMAS ====================

class TextBlockSchema(BaseModel):
    type: Literal[
        "title", "subtitle", "heading", "subheading",
        "paragraph", "bullet", "contact-line",
    ]
    text: str

    def to_block(self) -> TextBlock:
        return TextBlock(BlockKind(self.type), self.text)


class RightAlignBlockSchema(BaseModel):
    type: Literal["right-align"]
    lines: List[str]

    def to_block(self) -> RightAlignBlock:
        return RightAlignBlock(tuple(self.lines))


class ColumnSchema(BaseModel):
    title: str = ""
    items: List[str] = []


class ThreeColumnsBlockSchema(BaseModel):
    type: Literal["three-columns"]
    columns: List[ColumnSchema] = Field(..., min_length=COLUMN_COUNT, max_length=COLUMN_COUNT)

    def to_block(self) -> ThreeColumnsBlock:
        return ThreeColumnsBlock(tuple(Column(c.title, tuple(c.items)) for c in self.columns))


class SpacerBlockSchema(BaseModel):
    type: Literal["spacer"]
    size: float = Field(..., ge=0, le=MAX_SPACER_SIZE)

    def to_block(self) -> SpacerBlock:
        return SpacerBlock(self.size)


PdfTextBlock = Annotated[
    Union[TextBlockSchema, RightAlignBlockSchema, ThreeColumnsBlockSchema, SpacerBlockSchema],
    Field(discriminator="type"),
]

_block_adapter = TypeAdapter(PdfTextBlock)
_block_list_adapter = TypeAdapter(List[PdfTextBlock])


# ==================== PARSING ====================

def block_from_dict(data: Dict[str, Any]) -> Block:
    """
    Build a block from its tagged-dictionary form.

    Raises:
        pydantic.ValidationError: Unknown type or malformed payload
            (a ValueError subclass)
    """
    return _block_adapter.validate_python(data).to_block()


def blocks_from_dicts(items: Iterable[Dict[str, Any]]) -> List[Block]:
    """Validate a whole PdfTextBlock list; errors carry the item index."""
    return [schema.to_block() for schema in _block_list_adapter.validate_python(items)]
