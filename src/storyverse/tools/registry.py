"""
Tool Registry

Named tools with JSON input schemas, dispatched to the StyleService. Tool
arguments use camelCase names; every response carries a text block for the
caller and a JSON block with the structured result.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as ArgumentError
from pydantic.alias_generators import to_camel

from ..errors import StyleError
from ..models import RepresentativeSample
from .service import Example, StyleService


class ToolArgs(BaseModel):
    """Base for tool argument models (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeWritingSampleArgs(ToolArgs):
    text: str = Field(description="The text content to analyze")
    save_sample: bool = Field(default=True, description="Whether to save the text as a sample in the database")
    title: Optional[str] = Field(
        default=None,
        description="Title for the writing sample (required if saveSample is true and no sampleId provided)",
    )
    author: Optional[str] = Field(default=None, description="Author of the writing sample")
    sample_type: Optional[str] = Field(default=None, description="Type of writing (novel, screenplay, etc.)")
    tags: list[str] = Field(default_factory=list, description="Tags for categorizing the sample")
    project_id: Optional[str] = Field(default=None, description="ID of the project this sample belongs to")
    sample_id: Optional[str] = Field(default=None, description="Optional ID of existing sample to update with analysis")


class GetStyleProfileArgs(ToolArgs):
    profile_id: str = Field(description="ID of the style profile to retrieve")
    include_examples: bool = Field(default=False, description="Whether to include sample excerpts")
    include_style_notes: bool = Field(default=True, description="Whether to include human-readable style guidance notes")


class RepresentativeSampleArgs(ToolArgs):
    text_content: str = Field(description="An exemplary text passage representing this style")
    description: Optional[str] = Field(default=None, description="Description of what makes this sample representative")


class CreateStyleProfileArgs(ToolArgs):
    name: str = Field(description="Name for this style profile")
    sample_ids: list[str] = Field(description="IDs of writing samples to include in this profile")
    description: Optional[str] = Field(default=None, description="Description of this style profile")
    project_id: Optional[str] = Field(default=None, description="ID of the project this profile belongs to")
    profile_id: Optional[str] = Field(default=None, description="Optional ID of existing profile to update")
    genre: list[str] = Field(default_factory=list, description="Genres associated with this style profile")
    comparable_authors: list[str] = Field(default_factory=list, description="Authors with similar writing style")
    user_comments: Optional[str] = Field(default=None, description="Additional notes or requirements for this style")
    representative_samples: list[RepresentativeSampleArgs] = Field(
        default_factory=list, description="Text samples that exemplify this writing style"
    )
    add_to_existing: bool = Field(
        default=False,
        description="Whether to add these samples to an existing profile instead of replacing",
    )


class WriteInStyleArgs(ToolArgs):
    prompt: str = Field(description="What to write about")
    profile_id: Optional[str] = Field(default=None, description="ID of the style profile to use")
    length: Optional[int] = Field(default=None, description="Approximate target word count")
    include_style_notes: bool = Field(default=True, description="Whether to include style guidance notes")


@dataclass
class ToolResponse:
    """Content blocks returned from a tool call."""
    content: list[dict] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(block["text"] for block in self.content if block["type"] == "text")

    @property
    def json(self) -> Optional[dict]:
        for block in self.content:
            if block["type"] == "json":
                return block["json"]
        return None

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": f"Error: {message}"}], is_error=True)

    def to_dict(self) -> dict:
        return {"content": self.content, "isError": self.is_error}


@dataclass
class Tool:
    """A named operation with a typed argument model."""
    name: str
    description: str
    args_model: type[ToolArgs]
    handler: Callable[[Any], ToolResponse]

    def definition(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.args_model.model_json_schema(by_alias=True),
        }


def _render_examples(heading: str, examples: list[Example]) -> str:
    text = f"## {heading}\n\n"
    for example in examples:
        text += f"### {example.title}\n\n"
        text += f'"{example.excerpt}"\n\n'
    return text


class StyleTools:
    """
    The tool-invocation surface.

    Usage:
        tools = StyleTools(StyleService(store))
        tools.list_tools()
        response = tools.call_tool("analyze_writing_sample", {"text": "...", "saveSample": False})
    """

    def __init__(self, service: StyleService):
        self.service = service
        self._tools = {
            tool.name: tool
            for tool in [
                Tool(
                    "analyze_writing_sample",
                    "Analyzes a text sample to identify writing style characteristics and patterns",
                    AnalyzeWritingSampleArgs,
                    self._analyze_writing_sample,
                ),
                Tool(
                    "get_style_profile",
                    "Retrieves a writing style profile with guidance for writing in that style",
                    GetStyleProfileArgs,
                    self._get_style_profile,
                ),
                Tool(
                    "create_style_profile",
                    "Creates or updates a style profile based on analyzed writing samples",
                    CreateStyleProfileArgs,
                    self._create_style_profile,
                ),
                Tool(
                    "write_in_style",
                    "Packages a writing prompt with the guidance and examples of a style profile",
                    WriteInStyleArgs,
                    self._write_in_style,
                ),
            ]
        }

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[dict]:
        """Definitions of every tool, with JSON input schemas."""
        return [tool.definition() for tool in self._tools.values()]

    def call_tool(self, name: str, arguments: Optional[dict] = None) -> ToolResponse:
        """
        Invoke a tool by name.

        Unknown tools, invalid arguments and style errors come back as error
        responses; any other exception propagates.
        """
        tool = self._tools.get(name)
        if tool is None:
            return ToolResponse.error(f"Unknown tool: {name}")

        try:
            args = tool.args_model.model_validate(arguments or {})
        except ArgumentError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            return ToolResponse.error(f"Invalid arguments for {name}: {problems}")

        try:
            return tool.handler(args)
        except StyleError as e:
            return ToolResponse.error(str(e))

    # Handlers

    def _analyze_writing_sample(self, args: AnalyzeWritingSampleArgs) -> ToolResponse:
        result = self.service.analyze_writing_sample(
            text=args.text,
            save_sample=args.save_sample,
            title=args.title,
            author=args.author,
            sample_type=args.sample_type,
            tags=args.tags,
            project_id=args.project_id,
            sample_id=args.sample_id,
        )
        return ToolResponse(
            content=[
                {"type": "text", "text": f"Successfully analyzed the writing sample.\n\n{result.summary}"},
                {"type": "json", "json": result.to_dict()},
            ]
        )

    def _get_style_profile(self, args: GetStyleProfileArgs) -> ToolResponse:
        view = self.service.get_style_profile(
            args.profile_id,
            include_examples=args.include_examples,
            include_style_notes=args.include_style_notes,
        )

        text = f"# {view.profile.name}\n\n"
        if view.profile.description:
            text += f"{view.profile.description}\n\n"
        if view.style_guidance:
            text += view.style_guidance
        if view.examples:
            text += "\n\n" + _render_examples("Example Passages", view.examples)

        return ToolResponse(
            content=[
                {"type": "text", "text": text},
                {"type": "json", "json": view.to_dict()},
            ]
        )

    def _create_style_profile(self, args: CreateStyleProfileArgs) -> ToolResponse:
        summary = self.service.create_style_profile(
            name=args.name,
            sample_ids=args.sample_ids,
            description=args.description,
            project_id=args.project_id,
            profile_id=args.profile_id,
            genre=args.genre,
            comparable_authors=args.comparable_authors,
            user_comments=args.user_comments,
            representative_samples=[
                RepresentativeSample(text_content=r.text_content, description=r.description)
                for r in args.representative_samples
            ],
            add_to_existing=args.add_to_existing,
        )
        return ToolResponse(
            content=[
                {
                    "type": "text",
                    "text": f'Successfully {summary.action} style profile "{summary.name}" '
                            f"based on {summary.sample_count} samples.",
                },
                {"type": "json", "json": summary.to_dict()},
            ]
        )

    def _write_in_style(self, args: WriteInStyleArgs) -> ToolResponse:
        brief = self.service.write_in_style(
            prompt=args.prompt,
            profile_id=args.profile_id,
            length=args.length,
            include_style_notes=args.include_style_notes,
        )

        text = f"# Writing Request: {brief.writing_prompt}\n\n"
        text += f'Please write in the style of profile "{brief.profile_name}". {brief.length_instruction}\n\n'
        if brief.style_guidance:
            text += brief.style_guidance + "\n\n"
        if brief.examples:
            text += _render_examples("Example Passages In This Style", brief.examples)
        text += "## Your Task\n\n"
        text += f"Write about: {brief.writing_prompt}\n\n"

        return ToolResponse(
            content=[
                {"type": "text", "text": text},
                {"type": "json", "json": brief.to_dict()},
            ]
        )
