from __future__ import annotations
import argparse, shutil, os, sys
from typing import Dict, List

_TERM_WIDTH = shutil.get_terminal_size((100, 20)).columns


def _supports_color(stream=None) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return (stream or sys.stdout).isatty()


def _is_subparsers_action(action: argparse.Action) -> bool:
    """
    Return True for the 'subparsers' action using only public APIs:
    a mapping of names -> ArgumentParser instances.
    """
    choices = getattr(action, "choices", None)
    if not isinstance(choices, dict) or not choices:
        return False
    return all(isinstance(p, argparse.ArgumentParser) for p in choices.values())


def _command_helps(action: argparse.Action) -> Dict[str, str]:
    helps: Dict[str, str] = {}
    for choice_action in getattr(action, "_choices_actions", []):
        name = getattr(choice_action, "dest", None)
        if name:
            helps[name] = getattr(choice_action, "help", "") or ""
    if not helps:
        for name, sub in getattr(action, "choices", {}).items():
            helps[name] = getattr(sub, "description", "") or ""
    return helps


class CommandGroupHelpFormatter(argparse.HelpFormatter):
    """
    Help formatter that renders subparsers as a two-column table with
    right-justified (and, on a TTY, coloured) command names.
    """

    _ANSI_RESET = "\033[0m"
    _ANSI_BOLD = "\033[1m"
    _ANSI_CYAN = "\033[36m"

    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=32, width=_TERM_WIDTH)

    def _format_action(self, action: argparse.Action) -> str:
        # Hide the default -h/--help entry everywhere
        if getattr(action, "option_strings", None) and any(s in ("-h", "--help") for s in action.option_strings):
            return ""
        if not _is_subparsers_action(action):
            return super()._format_action(action)

        helps = _command_helps(action)
        if not helps:
            return ""
        names = list(helps.keys())
        name_w = max(len(n) for n in names)
        label = (getattr(action, "metavar", None) or getattr(action, "dest", "") or "command").capitalize()

        out_lines: List[str] = ["", f"  {label.rjust(name_w)}  Description", f"  {'-'*name_w}  -----------"]
        color = _supports_color()
        for n in names:
            pad = " " * max(0, name_w - len(n))
            shown = f"{self._ANSI_BOLD}{self._ANSI_CYAN}{n}{self._ANSI_RESET}" if color else n
            wrapped = self._fill_text(helps[n], width=_TERM_WIDTH - (name_w + 4), indent="")
            wrapped_lines = wrapped.splitlines() or [""]
            out_lines.append(f"  {pad}{shown}  {wrapped_lines[0]}")
            for cont in wrapped_lines[1:]:
                out_lines.append(f"  {' ' * name_w}  {cont}")
        out_lines.append("")
        return "\n".join(out_lines)


class CustomArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser that prints the command's help before reporting an error.
    This mirrors tools like git and samtools and is useful for missing-required-arg cases.
    """

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("formatter_class", CommandGroupHelpFormatter)
        super().__init__(*args, **kwargs)

    def error(self, message: str) -> None:
        self.print_help(sys.stderr)
        self.exit(2, f"Error: {message}\n")


class ActionParser(CustomArgumentParser):
    """Parser class for individual commands; nested subparsers inherit it."""

    def add_subparsers(self, **kwargs):
        kwargs.setdefault("parser_class", ActionParser)
        return super().add_subparsers(**kwargs)


class CommandsAction(argparse.Action):
    """
    argparse Action: --commands -> print command tree and exit(0).
    """
    def __init__(self, option_strings, dest, nargs=0, **kwargs) -> None:
        super().__init__(option_strings, dest, nargs=nargs, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        use_color = _supports_color()
        cyan = "\033[96m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        prog = parser.prog.split()[0]
        subparsers_actions = [a for a in parser._actions if _is_subparsers_action(a)]
        if not subparsers_actions:
            sys.stdout.write(prog + "\n")
            parser.exit(0)

        helps = _command_helps(subparsers_actions[0])
        names = list(helps.keys())
        tree = [prog]
        for i, name in enumerate(names):
            pfx = "└── " if i == len(names) - 1 else "├── "
            line = f"{pfx}{cyan}{name}{reset}"
            if helps[name]:
                line += f"{' ' * max(0, 24 - len(pfx + name))}  ({helps[name]})"
            tree.append(line)
        sys.stdout.write("\n".join(tree) + "\n")
        parser.exit(0)
