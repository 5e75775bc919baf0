"""Label placeholder substitution for annotation text.

Annotations may reference the alert's own labels with Go-template-like
placeholders, e.g. ``"{{.series}} is {{.value}}"``.  Only this exact
``{{.KEY}}`` form is recognised; there is no general template engine.
"""

import re
from collections.abc import Mapping

#: ``{{.KEY}}`` where KEY is any run of non-brace characters.
PLACEHOLDER = re.compile(r"\{\{\.([^{}]+)\}\}")


def render_template(text: str, values: Mapping[str, str]) -> str:
    """Replace every known ``{{.KEY}}`` in *text* with ``values[KEY]``.

    The scan is a single left-to-right pass: replacement text is never
    rescanned, so a label value that itself looks like a placeholder is
    emitted literally.  Keys are case-sensitive.  Placeholders naming an
    unknown key are left exactly as written.

    Args:
        text: Annotation value possibly containing placeholders.
        values: Lookup of label keys to label values.

    Returns:
        The rendered string.
    """

    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        if key in values:
            return values[key]
        return match.group(0)

    return PLACEHOLDER.sub(_substitute, text)


def render_annotations(
    annotations: Mapping[str, str],
    labels: Mapping[str, str],
) -> dict[str, str]:
    """Render every annotation value against *labels*, keeping key order."""
    return {key: render_template(value, labels) for key, value in annotations.items()}
