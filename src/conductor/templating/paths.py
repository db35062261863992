"""Template directory references embedded in generated prompts.

Some hosts install the bundle to a location that is only known after
installation. For those, the prompt carries a shell expression that the host
evaluates at run time to locate the templates directory.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaticPath:
    """A templates path known when the bundle is built."""

    path: str

    def placeholder(self) -> str:
        """Value substituted for the template path token."""
        return self.path

    def resolve(self, content: str) -> str:
        return content


@dataclass(frozen=True)
class RuntimeResolved:
    """A templates path located on the installed machine at run time.

    Substitution first inserts ``marker``; ``resolve`` then swaps the marker
    for a ``find`` expression that searches ``search_root`` for ``anchor``,
    skips any path inside ``exclude``, takes the first hit and derives the
    templates directory from it.
    """

    marker: str  # e.g. "__CLAUDE_TEMPLATE_PATH_DYNAMIC__"
    anchor: str = "conductor/templates/workflow.md"
    exclude: str = ".git"
    search_root: str = "~"
    directory: str = "templates"

    def placeholder(self) -> str:
        """Value substituted for the template path token."""
        return self.marker

    def shell_expression(self) -> str:
        """Render the shell expression the host evaluates.

        The anchor's grandparent is the bundle root; ``directory`` is joined
        onto it. No match yields an invalid path.
        """
        return (
            f'$(find {self.search_root} -path "*/{self.anchor}"'
            f' -not -path "*/{self.exclude}/*" 2>/dev/null'
            " | head -1 | xargs dirname | xargs dirname)"
            f"/{self.directory}"
        )

    def resolve(self, content: str) -> str:
        return content.replace(self.marker, self.shell_expression())


TemplatePath = StaticPath | RuntimeResolved


def runtime_marker(platform_name: str) -> str:
    """Return the reserved marker token for a platform."""
    return f"__{platform_name.upper()}_TEMPLATE_PATH_DYNAMIC__"


def resolve_template_path(content: str, template_path: TemplatePath) -> str:
    """Replace any deferred template path marker in content."""
    return template_path.resolve(content)
