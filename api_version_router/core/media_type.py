"""
Media type parsing for Accept headers.
"""
import re
from dataclasses import dataclass, field

TOP_LEVEL_TYPES = frozenset(
    ["application", "audio", "font", "image", "message", "model", "multipart", "text", "video", "*"]
)

_MEDIA_TYPE_PATTERN = re.compile(r"^([a-zA-Z*]+)/([a-zA-Z0-9!#$%^&*_\-+{}|'.`~]{1,127})((?:;.*)?)$")
_PARAMETER_PATTERN = re.compile(r"^([a-zA-Z0-9!#$%&'*+\-.^_`|~]+)=(\"[^\"]*\"|[a-zA-Z0-9!#$%&'*+\-.^_`|~]+)$")
# Splits on ';' outside of quoted strings
_PARAMETER_SPLITTER = re.compile(r";(?=(?:[^\"]*\"[^\"]*\")*[^\"]*$)")


@dataclass(frozen=True)
class MediaType:
    """A parsed media type such as ``application/vnd.acme.v2+json``."""

    type: str
    subtype: str
    suffix: str | None = None
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def subtype_facets(self) -> list[str]:
        """Subtype split on '.', e.g. ``["vnd", "acme", "v2"]``."""
        return self.subtype.split(".")

    @classmethod
    def parse(cls, value: str) -> "MediaType | None":
        """
        Parse a media type string.

        Args:
            value: Raw media type, optionally with ';' parameters

        Returns:
            MediaType, or None if the value is not a structurally valid media type
        """
        match = _MEDIA_TYPE_PATTERN.match(value.strip())
        if not match:
            return None

        top_level, full_subtype, raw_parameters = match.groups()
        if top_level.lower() not in TOP_LEVEL_TYPES:
            return None

        subtype, plus, suffix = full_subtype.partition("+")
        if not subtype or (plus and not suffix):
            return None

        parameters: dict[str, str] = {}
        if raw_parameters:
            for chunk in _PARAMETER_SPLITTER.split(raw_parameters)[1:]:
                param = _PARAMETER_PATTERN.match(chunk.strip())
                if not param:
                    return None
                parameters[param.group(1).lower()] = param.group(2).strip('"')

        return cls(type=top_level, subtype=subtype, suffix=suffix or None, parameters=parameters)

    def __str__(self) -> str:
        value = f"{self.type}/{self.subtype}"
        if self.suffix:
            value += f"+{self.suffix}"
        for key, param in self.parameters.items():
            value += f";{key}={param}"
        return value
