"""Options that control a crawl and the output of a command."""

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from dbcrawler.inclusion.rules import IncludeAll, InclusionRule


class CrawlerOptions(BaseModel):
    """What to retrieve, and which objects to keep."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    schema_inclusion_rule: InclusionRule = Field(default_factory=IncludeAll)
    table_inclusion_rule: InclusionRule = Field(default_factory=IncludeAll)
    routine_inclusion_rule: InclusionRule = Field(default_factory=IncludeAll)
    retrieve_columns: bool = True
    retrieve_routines: bool = True
    type_map_overrides: Dict[str, str] = Field(default_factory=dict)


class OutputOptions(BaseModel):
    """Where and how a command writes its output.

    All fields are optional. Without an output file, output goes to the
    console.
    """

    output_file: Optional[Path] = None
    template: Optional[Path] = None
    title: Optional[str] = None
