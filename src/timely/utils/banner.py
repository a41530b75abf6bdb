import pyfiglet
from rich.align import Align
from rich.console import Console
from rich.text import Text

TITLE = "Timely"
TAGLINE = "Plan. Work. Thrive."


def render_banner(font: str = "slant") -> Text:
    """Builds the Timely splash: figlet title above an italic tagline."""
    art_text = pyfiglet.Figlet(font=font).renderText(TITLE)
    title = Text(art_text.rstrip("\n"), style="bold cyan")
    subtext = Text(f"\n{TITLE}: {TAGLINE}\n", justify="center", style="italic white")
    return title + subtext


def display(console: Console | None = None) -> None:
    """Prints the centered splash banner."""
    console = console or Console()
    console.print(Align.center(render_banner()))
