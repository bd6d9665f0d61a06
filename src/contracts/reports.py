"""
Transport-neutral report payloads.

Command handlers and renderers produce ``Report`` objects; the Discord adapter
converts them to embeds. Nothing in the core talks to discord.py directly.
"""

from pydantic import BaseModel, Field

from src.contracts.common import EmbedColor


class ReportField(BaseModel):
    """Named text block inside a report."""

    name: str
    value: str
    inline: bool = False


class Report(BaseModel):
    """Message payload delivered by the transport."""

    title: str
    description: str = ""
    footer: str | None = Field(None, description="Source hint appended to the footer")
    color: int = EmbedColor.INFO
    thumbnail: bool = True
    fields: list[ReportField] = Field(default_factory=list)

    def add_field(self, name: str, value: str, inline: bool = False) -> "Report":
        self.fields.append(ReportField(name=name, value=value, inline=inline))
        return self

    @property
    def total_chars(self) -> int:
        """Characters counted against the transport's per-message limit."""
        return (
            len(self.title)
            + len(self.description)
            + len(self.footer or "")
            + sum(len(f.name) + len(f.value) for f in self.fields)
        )
