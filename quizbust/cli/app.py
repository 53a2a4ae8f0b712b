"""Typer CLI application for playing QuizBust."""

import logging
from typing import Callable

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from quizbust import __version__
from quizbust.agents.requester import get_requester
from quizbust.config.settings import get_settings
from quizbust.engine.game import QuizGame
from quizbust.engine.scoring import potential_loss, potential_win
from quizbust.errors import ConfigurationError
from quizbust.models.quiz import CHOICE_LETTERS, QuizQuestion
from quizbust.models.session import MIN_WAGER, Phase, SessionState
from quizbust.server.app import create_app

app = typer.Typer(
    name="quizbust",
    help="Bet on AI-generated trivia questions",
    add_completion=False,
)

console = Console()

QUIT_WORDS = {"quit", "exit"}

DIFFICULTY_STYLES = {
    1: "green",
    2: "bright_green",
    3: "yellow",
    4: "dark_orange",
    5: "red",
}


@app.command()
def play() -> None:
    """
    Play QuizBust in the terminal.

    Questions are requested through QUIZBUST_PROXY_URL when it is set,
    otherwise directly from the provider using DEEPSEEK_API_KEY.
    """
    settings = get_settings()
    try:
        requester = get_requester(settings)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}", style="bold")
        raise typer.Exit(code=1)

    game = QuizGame(requester)
    try:
        run_game(game)
    except (EOFError, KeyboardInterrupt):
        console.print("\n[cyan]Thanks for playing![/cyan]")


@app.command()
def serve() -> None:
    """Run the proxy server that holds the provider API key."""
    settings = get_settings()
    if not settings.api_key:
        console.print(
            "[yellow]Warning:[/yellow] DEEPSEEK_API_KEY is not set; relay requests will fail."
        )
    console.print(
        f"[cyan]Proxy listening on {settings.server_host}:{settings.server_port}[/cyan]"
    )
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def info() -> None:
    """Display information about the game."""
    info_text = f"""
[bold cyan]QuizBust[/bold cyan]
Version: {__version__}

[bold]How to play:[/bold]
  • Pick a subject and get an AI-generated question
  • See its category and difficulty (1-5 stars)
  • Wager between $10 and $1000 (never more than you have)
  • Right answer: win wager × difficulty
  • Wrong answer: lose wager × difficulty
  • Hit $0 and it's game over

[bold]Configuration:[/bold]
  • QUIZBUST_PROXY_URL - play through a proxy (recommended)
  • DEEPSEEK_API_KEY - provider key (proxy server or direct play)
  • PROVIDER_BASE_URL, MODEL_NAME, REPLY_FORMAT
    """
    console.print(Panel(info_text, title="QuizBust Info", border_style="cyan"))


def run_game(game: QuizGame) -> None:
    """Drive the game loop until the player quits."""
    while True:
        state = game.state
        display_balance(state)
        if state.message:
            console.print(f"[red]{escape(state.message)}[/red]")

        if state.phase == Phase.INPUT:
            subject = Prompt.ask(
                "Enter a subject (e.g., Mathematics, History, Science) or 'quit'"
            )
            if subject.strip().lower() in QUIT_WORDS:
                console.print("[cyan]Thanks for playing![/cyan]")
                return
            with_spinner("Generating your question...", lambda: game.submit_subject(subject))

        elif state.phase == Phase.PREVIEW:
            display_preview(state.current_question)
            Prompt.ask("Press Enter to place your wager", default="", show_default=False)
            game.proceed()

        elif state.phase == Phase.WAGERING:
            display_wager(state)
            amount = IntPrompt.ask(
                f"Wager amount (${MIN_WAGER}-${state.max_wager})", default=state.wager
            )
            state = game.adjust_wager(amount)
            if state.message:
                continue
            display_potential(state)
            if Confirm.ask("Lock in wager?", default=True):
                game.lock_wager()

        elif state.phase == Phase.QUESTION:
            display_question(state)
            answer = Prompt.ask("Your answer (A-D, or G to give up)").strip().upper()
            if answer == "G":
                game.abandon()
                continue
            index = CHOICE_LETTERS.index(answer) if len(answer) == 1 and answer in CHOICE_LETTERS else -1
            state = game.select(index)
            if state.message:
                continue
            game.submit_answer()

        elif state.phase == Phase.RESULT:
            display_result(state)
            label = "Back to Prompt" if state.balance == 0 else "Next Question"
            Prompt.ask(f"Press Enter for: {label}", default="", show_default=False)
            with_spinner("Generating your question...", game.next_question)

        elif state.phase == Phase.GAME_OVER:
            display_game_over(state)
            if not Confirm.ask("Start new game?", default=True):
                console.print("[cyan]Thanks for playing![/cyan]")
                return
            game.restart()


def with_spinner(description: str, action: Callable[[], SessionState]) -> SessionState:
    """Run an action that may wait on the network behind a spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"[cyan]{description}", total=None)
        return action()


def difficulty_stars(difficulty: int) -> str:
    """Render a difficulty as five stars, e.g. ★★★☆☆."""
    return "★" * difficulty + "☆" * (5 - difficulty)


def difficulty_label(difficulty: int) -> str:
    """Coloured stars plus the numeric difficulty."""
    style = DIFFICULTY_STYLES.get(difficulty, "grey50")
    return f"[{style}]{difficulty_stars(difficulty)}[/{style}] ({difficulty}/5)"


def display_balance(state: SessionState) -> None:
    """Display the player's balance."""
    console.print()
    console.print(f"[bold green]💰 Current Balance: ${state.balance}[/bold green]")


def display_preview(question: QuizQuestion) -> None:
    """Display the category and difficulty before the wager."""
    text = (
        f"Subject: [bold]{escape(question.category)}[/bold]\n"
        f"Difficulty: {difficulty_label(question.difficulty)}\n\n"
        "Higher difficulty means higher risk and reward!"
    )
    console.print(Panel(text, title="Question Preview", border_style="cyan"))


def display_wager(state: SessionState) -> None:
    """Display the wager range for the current question."""
    question = state.current_question
    console.print(
        Panel(
            f"Wager between [bold]${MIN_WAGER}[/bold] and [bold]${state.max_wager}[/bold] "
            f"in steps of $10.\n"
            f"{escape(question.category)} {difficulty_label(question.difficulty)} - "
            f"payouts are wager × {question.difficulty}",
            title="Place Your Wager",
            border_style="cyan",
        )
    )


def display_potential(state: SessionState) -> None:
    """Display what the wager can win or lose."""
    difficulty = state.current_question.difficulty
    table = Table(show_header=False, border_style="cyan")
    table.add_column("Outcome", style="white")
    table.add_column("Amount")
    table.add_row("If Correct", f"[green]+${potential_win(state.wager, difficulty)}[/green]")
    table.add_row("If Wrong", f"[red]-${potential_loss(state.wager, difficulty)}[/red]")
    table.add_row("Multiplier", f"Wager × {difficulty} (difficulty)")
    console.print(table)


def display_question(state: SessionState) -> None:
    """Display the question and its lettered choices."""
    question = state.current_question
    header = (
        f"[bold]{escape(question.category)}[/bold]  {difficulty_label(question.difficulty)}\n"
        f"Wagered: ${state.wager} | Potential: ±${potential_win(state.wager, question.difficulty)}"
    )
    lines = [header, "", f"[bold]{escape(question.question_text)}[/bold]", ""]
    for letter, choice in zip(CHOICE_LETTERS, question.choices):
        lines.append(f"  [bold]{letter}.[/bold] {escape(choice)}")
    console.print(Panel("\n".join(lines), title="Question", border_style="blue"))


def display_result(state: SessionState) -> None:
    """Display whether the answer was right and the payout."""
    question = state.current_question
    outcome = state.last_outcome

    lines = []
    for i, (letter, choice) in enumerate(zip(CHOICE_LETTERS, question.choices)):
        text = f"{letter}. {escape(choice)}"
        if i == question.correct_index:
            text = f"[green]{text} ✓[/green]"
        elif i == outcome.selected_index:
            text = f"[red]{text} ✗[/red]"
        lines.append(f"  {text}")
    lines.append("")

    formula = f"Wager: ${outcome.wager} × Difficulty: {outcome.difficulty} = ${outcome.delta}"
    if outcome.is_correct:
        lines.append("[bold green]🎉 Correct![/bold green]")
        lines.append(f"You won [bold]${outcome.delta}[/bold]!")
        border = "green"
    else:
        lines.append("[bold red]❌ Incorrect[/bold red]")
        lines.append(
            f"The correct answer was: [bold]{question.correct_letter}. "
            f"{escape(question.correct_choice)}[/bold]"
        )
        lines.append(f"You lost [bold]${outcome.delta}[/bold]")
        border = "red"
    lines.append(formula)

    console.print(Panel("\n".join(lines), title="Result", border_style=border))


def display_game_over(state: SessionState) -> None:
    """Display the game over screen."""
    console.print(
        Panel(
            "[bold red]💸 Game Over![/bold red]\n"
            "You've lost all your money!\n\n"
            f"Subject: [bold]{escape(state.subject)}[/bold]",
            border_style="red",
        )
    )


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@app.callback()
def callback() -> None:
    """
    QuizBust - wager on AI-generated trivia questions.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{escape(str(e))}", style="bold")
        raise typer.Exit(code=1)
    configure_logging(settings.log_level)


if __name__ == "__main__":
    app()
