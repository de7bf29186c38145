"""Label conventions used when a label has to be created on a repository.

``set_label`` creates a missing label before applying it. GitHub requires a
color for every label, so labels created by the bot get a stable default.
Well-known names get a familiar color so repos bootstrapped by the bot look
like repos set up by hand.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LabelSpec:
    name: str
    color: str
    description: str


DEFAULT_LABEL_COLOR = "ededed"
DEFAULT_LABEL_DESCRIPTION = "Created by github-bot-platform"


KNOWN_LABEL_SPECS: tuple[LabelSpec, ...] = (
    LabelSpec(name="bug", color="d73a4a", description="Something isn't working"),
    LabelSpec(name="enhancement", color="a2eeef", description="New feature or request"),
    LabelSpec(name="question", color="d876e3", description="Further information is requested"),
    LabelSpec(name="documentation", color="0075ca", description="Improvements or additions to documentation"),
)


def label_spec_for(name: str) -> LabelSpec:
    """Return the spec used to create ``name`` on a repository."""

    normalized = name.strip()
    for spec in KNOWN_LABEL_SPECS:
        if spec.name.lower() == normalized.lower():
            return LabelSpec(name=normalized, color=spec.color, description=spec.description)
    return LabelSpec(
        name=normalized,
        color=DEFAULT_LABEL_COLOR,
        description=DEFAULT_LABEL_DESCRIPTION,
    )
