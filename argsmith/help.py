"""
Argsmith help rendering.

HelpRenderer formats a registry's final definitions into usage/help text. It
only reads; rendering never registers, binds, or reorders anything.

Layout (help.compact=0; the compact default drops the blank lines)
    usage: <program> <input> [<output>]

    Arguments:
        <input>    file to read
        [<output>]    file to write

    Options:
        -h, --help    Show this help.
        -o, --out <file>    write result to a file
        --mode <fast|slow>    pick a mode

- '{tab}' is Options.tab; the same string separates names from descriptions.
- Positional placeholders: <name> when required, [<name>] when optional.
- Flag placeholders: the value name, or the pipe-joined choices when declared,
  wrapped the same way; flags without a value (or without a name and choices)
  show no placeholder.
- Options.help_show filters the Arguments and Options sections; the usage line
  always lists every named positional. Options.help_compact drops the blank lines
  between sections.
"""
from collections import defaultdict

from rich.text import Text

from .options import SHOW_ALL, SHOW_DEFINED, SHOW_WITH_DESCRIPTION


def _wrap(label, required):
    return "<%s>" % label if required else "[<%s>]" % label


class HelpRenderer:
    """
    read-only formatter over a Registry.

    parameters
    - registry: the Registry whose definitions are rendered.
    - colorful: style the rich renderable (plain text output is never styled).
    """

    def __init__(self, registry, /, *, colorful=True):
        self._registry = registry
        self._colorful = bool(colorful)

    # --- selection ---

    def _named_args(self):
        # unnamed entries are synthesized from surplus input
        return [arg for arg in self._registry.args if arg.name]

    def _visible_args(self):
        show = self._registry.options.help_show
        for arg in self._named_args():
            if show == SHOW_WITH_DESCRIPTION and not arg.description:
                continue
            yield arg

    def _visible_flags(self):
        show = self._registry.options.help_show
        for flag in self._registry.flags:
            if show == SHOW_WITH_DESCRIPTION and not flag.description:
                continue
            if show == SHOW_DEFINED and not flag.is_defined:
                continue
            yield flag

    # --- fragments ---

    @staticmethod
    def placeholder(definition, /):
        """
        placeholder of a positional (<name>/[<name>]) or of a flag's value.

        returns an empty string when there is nothing to show.
        """
        if hasattr(definition, "has_value"):
            if not definition.has_value:
                return ""
            value = definition.value
            label = value.choices_text() or value.name
            return _wrap(label, value.required) if label else ""
        return _wrap(definition.name, definition.required) if definition.name else ""

    @staticmethod
    def names(flag, /):
        """short alias before long alias, comma-joined when both exist."""
        return ", ".join(name for name in (flag.short, flag.long) if name)

    def usage(self):
        program = self._registry.program
        placeholders = [self.placeholder(arg) for arg in self._named_args()]
        return " ".join(["usage:", program, *placeholders]) if program else " ".join(["usage:", *placeholders])

    # --- plain text ---

    def render(self):
        tab = self._registry.options.tab
        separator = "\n" if self._registry.options.help_compact else "\n\n"

        sections = [self.usage()]

        lines = ["Arguments:"]
        for arg in self._visible_args():
            line = tab + self.placeholder(arg)
            if arg.description:
                line += tab + arg.description
            lines.append(line)
        sections.append("\n".join(lines))

        lines = ["Options:"]
        for flag in self._visible_flags():
            line = tab + self.names(flag)
            if placeholder := self.placeholder(flag):
                line += " " + placeholder
            if flag.description:
                line += tab + flag.description
            lines.append(line)
        sections.append("\n".join(lines))

        return separator.join(sections) + "\n"

    def __str__(self):
        return self.render()

    # --- rich ---

    def __rich__(self):
        """
        styled rendering of the same layout.

        palette keys: usage-label, program-name, section-label, metavar, choice,
        flag-name, description. Override through a __styles__ mapping in __main__.
        """
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "section-label": "bold #FFFFFF",  # Pure white headers
            "metavar": "bold #FFD600",  # AMBER for parameters
            "choice": "bold #FF4D94",  # MAGENTA → choices stand out
            "flag-name": "bold #22C55E",  # GREEN for flags
            "description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""

        tab = self._registry.options.tab
        separator = "\n" if self._registry.options.help_compact else "\n\n"

        render = Text()
        render.append("usage:", styler("usage-label"))
        if self._registry.program:
            render.append(" ").append(self._registry.program, styler("program-name"))
        for arg in self._named_args():
            render.append(" ").append(self.placeholder(arg), styler("metavar"))
        render.append(separator)

        render.append("Arguments:", styler("section-label")).append("\n")
        for arg in self._visible_args():
            render.append(tab).append(self.placeholder(arg), styler("metavar"))
            if arg.description:
                render.append(tab).append(arg.description, styler("description"))
            render.append("\n")
        render.append(separator[1:])

        render.append("Options:", styler("section-label")).append("\n")
        for flag in self._visible_flags():
            render.append(tab).append(self.names(flag), styler("flag-name"))
            if placeholder := self.placeholder(flag):
                render.append(" ").append(placeholder, styler("choice" if flag.value.choices else "metavar"))
            if flag.description:
                render.append(tab).append(flag.description, styler("description"))
            render.append("\n")

        return render


__all__ = (
    "HelpRenderer",
    "SHOW_WITH_DESCRIPTION",
    "SHOW_DEFINED",
    "SHOW_ALL",
)
