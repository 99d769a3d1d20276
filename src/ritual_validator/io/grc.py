"""Parser for the ``.grc`` plain-text ritual format.

Layout::

    # Moonrise Gathering
    # Bioregion: Mythic Forest
    # Created: 2024-06-21
    ## Description
    ...
    ## Cultural Context
    ...
    ## Ritual Content
    ...

Any other ``##`` heading closes the content section.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ritual_validator.constants import BIOREGIONS

_SECTION_HEADINGS = {
    "## Description": "description",
    "## Cultural Context": "cultural_context",
    "## Ritual Content": "content",
}


@dataclass(frozen=True)
class GrcDocument:
    name: str = ""
    bioregion_id: str = ""
    description: str = ""
    cultural_context: str = ""
    content: str = ""
    unknown_bioregion: str | None = None
    headings: list[str] = field(default_factory=list)


def bioregion_id_for(name: str) -> str:
    return BIOREGIONS.get(name.strip(), "")


def parse_grc(text: str) -> GrcDocument:
    fields: dict[str, list[str]] = {"description": [], "cultural_context": [], "content": []}
    name = ""
    bioregion_id = ""
    unknown_bioregion: str | None = None
    headings: list[str] = []
    section = ""

    for raw in text.splitlines():
        line = raw.rstrip("\r")
        if line.startswith("# "):
            if "Bioregion:" in line:
                label = line.split("Bioregion:", 1)[1].strip()
                bioregion_id = bioregion_id_for(label)
                if not bioregion_id:
                    unknown_bioregion = label
            elif "Created:" not in line:
                name = line[2:].strip()
            continue
        if line.startswith("## "):
            heading = line.strip()
            headings.append(heading)
            section = next((key for prefix, key in _SECTION_HEADINGS.items() if heading.startswith(prefix)), "")
            continue
        if section == "content":
            # Blank lines are kept so paragraph structure survives.
            fields["content"].append(line)
        elif line.strip() and section:
            fields[section].append(line.strip())

    return GrcDocument(
        name=name,
        bioregion_id=bioregion_id,
        description=" ".join(fields["description"]),
        cultural_context=" ".join(fields["cultural_context"]),
        content="\n".join(fields["content"]).strip("\n"),
        unknown_bioregion=unknown_bioregion,
        headings=headings,
    )
