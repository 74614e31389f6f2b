from pathlib import Path

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.style import Style
from rich.text import Text
from rich.traceback import install
from rich.tree import Tree


# Install rich traceback handler
install()


console = Console()


class TerminalBase:
    """Messages & statements printed while running the comparison workflows"""

    @classmethod
    def print_equals(cls, text: str):
        console.print("\n")
        console.print(f"\n==== {text} ====")
        console.print("\n")

    @classmethod
    def print_workflow_name(cls, wkfl_name: str, wkfl_desc: str):
        group = Group(
            Rule(style="green"),
            Rule(title=wkfl_name, style="red"),
            Rule(style="green")
        )
        panel = Padding(
            Panel(
                wkfl_desc,
                style="cyan"
            ),
            (1, 4)
        )
        console.print(group)
        console.print(panel)
        console.print("\n")

    @classmethod
    def print_with_dots(cls, message: str, console: Console = console, style: Style | str | None = None) -> None:
        """
        Print a message and fill the remaining space to the end of the line with dots.

        Args:
            message: The message to print
            console: Rich Console instance to use for printing
            style: Optional Rich style to apply to the message
        """
        dots_needed = console.width - len(message) - 1
        text = Text()
        text.append(message, style=style or "white")
        if dots_needed > 0:
            text.append("." * dots_needed, style="cyan")
        console.print(text)

    @classmethod
    def print_data_root_tree(cls, root: Path):
        tree = Tree(f"📁 [bold blue]{root}[/]")
        nodes: dict[Path, Tree] = {root: tree}
        for dir_path in sorted(root.glob("**/")):  # Recursively get all directories
            if dir_path == root:
                continue
            parent = nodes.get(dir_path.parent, tree)
            nodes[dir_path] = parent.add(f"📁 [green]{dir_path.name}[/]")
        console.print(tree)
