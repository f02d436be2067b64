"""
wordle_entropy.py

Unified CLI for the entropy Wordle solver.

Modes:
assist WORD_FILE: suggest guesses for a game you are playing elsewhere; enter
  the word you guessed and the colours you got (g = green, y = yellow,
  b = black) after each round.
play WORD_FILE: play against a secret drawn from WORD_FILE. With -auto the
  solver plays itself.
batch WORD_FILE SOLUTION_FILE: run one simulated game per solution and report
  the guesses of every game and the overall performance.
rank WORD_FILE: top words by entropy over the whole list (opening words).

Optional:
-verbose: debug logging.
Word files are newline separated, one word per line; "-" reads stdin.
"""

import argparse
import logging
import sys

import numpy as np

from wordle_solver.batch import format_summary, run_batch, summarize
from wordle_solver.entropy import evaluate_all
from wordle_solver.game import (
    DEFAULT_OPENING,
    TOP_SUGGESTIONS,
    AssistedGame,
    GameStatus,
    PlayGame,
    SimulatedGame,
)
from wordle_solver.patterns import Color, MalformedPattern, Pattern, score
from wordle_solver.words import MalformedWord, Word, read_words


TOP_RANKED = 20

_BOLD = "\033[1m"
_RESET = "\033[0m"
_COLOURS = {
    Color.GREEN: "\033[32m",
    Color.YELLOW: "\033[33m",
    Color.BLACK: "\033[30m",
}


def colourise(pattern: Pattern) -> str:
    """Return the ANSI-coloured symbols of PATTERN."""
    return "".join(
        f"{_COLOURS[color]}{color.symbol}{_RESET}" for color in pattern.colors()
    )


def bold(text) -> str:
    return f"{_BOLD}{text}{_RESET}"


def print_start(name, items, max_length):
    """Print NAME, the number of ITEMS and the first MAX_LENGTH of them."""
    items = list(items)
    shown = ", ".join(str(item) for item in items[:max_length])
    ellipsis = ", ..." if len(items) > max_length else ""
    print(f"{bold(f'{name} ({len(items)} entries):')} {shown}{ellipsis}")


def read_word_file(handle):
    try:
        with handle:
            words = read_words(handle)
    except MalformedWord as exc:
        raise SystemExit(f"{handle.name}: {exc}") from exc
    if not words:
        raise SystemExit(f"{handle.name}: no words found")
    return words


def parse_word_arg(text):
    try:
        return Word.parse(text)
    except MalformedWord as exc:
        raise SystemExit(str(exc)) from exc


def prompt(message, parse):
    """Ask until PARSE accepts the answer. Returns None on end of input."""
    while True:
        try:
            response = input(bold(message))
        except EOFError:
            print("\nAborted: no more input.")
            return None
        try:
            return parse(response)
        except (MalformedWord, MalformedPattern) as exc:
            print(f"Invalid input: {exc}")


def run_assist(words, top, workers):
    game = AssistedGame(words, workers=workers)

    while not game.status.is_terminal:
        print_start("Solution Space", game.space, TOP_SUGGESTIONS)
        print_start("Suggested Guesses", game.suggestions(top), top)
        guess = prompt("Enter guessed word: ", Word.parse)
        if guess is None:
            return
        pattern = prompt("Enter resulting pattern: ", Pattern.parse)
        if pattern is None:
            return
        print(f"You have guessed {bold(guess)} with result {colourise(pattern)}")
        game.submit(guess, pattern)

    if game.status is GameStatus.WON:
        print(bold(f"Success!   -> {game.state.solution}."))
    else:
        print(f"{bold('Failure!')}   {game.status.value.capitalize()}!")
    print(f"Score {game.round}")


def run_play(words, seed, auto, opening, workers):
    rng = np.random.default_rng(seed)

    if auto:
        game = SimulatedGame.random(words, opening, rng, workers=workers)
        while not game.state.status.is_terminal:
            guess = game.step()
            print(f"{bold(guess)} -> {colourise(score(guess, game.solution))}")
        _report_play(game.state.status, game.solution, game.state.round)
        return

    game = PlayGame(words, rng)
    while not game.status.is_terminal:
        guess = prompt("Guess a word: ", Word.parse)
        if guess is None:
            print(bold(f"The word was {game.secret}."))
            return
        result = game.guess(guess)
        print(bold(f"-> {colourise(result)}"))
    _report_play(game.status, game.secret, game.round)


def _report_play(status, secret, rounds):
    if status is GameStatus.WON:
        print(bold(f"Success!   -> {secret}."))
    else:
        print(f"{bold('Failure!')}   {status.value.capitalize()}!")
        print(bold(f"The word was {secret}."))
    print(f"Score {rounds}")


def run_batch_mode(words, solutions, opening, workers, progress_mode):
    print(
        f"Simulating {len(solutions):,} games over {len(words):,} words "
        f"with opening word {opening}..."
    )
    records = run_batch(
        words, solutions, opening, workers=workers, progress=progress_mode == "bar"
    )
    if progress_mode == "off":
        for record in records:
            print(record)
    print()
    print(format_summary(summarize(records)))


def run_rank(words, top, workers):
    print("Computing single-guess entropies...")
    evaluations = evaluate_all(words, words, workers=workers)
    print(f"\nTop {min(top, len(evaluations))} guesses over {len(words):,} words:")
    for evaluation in evaluations[:top]:
        print(f"{evaluation.word}: {evaluation.entropy:.4f} bits")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Entropy based Wordle solver: assist, play, batch and rank modes."
    )
    parser.add_argument(
        "-verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    assist = subparsers.add_parser(
        "assist",
        help="Help with a game you are playing; enter guesses and results as you go.",
    )
    assist.add_argument(
        "word_file",
        type=argparse.FileType("rb"),
        help="The list of all allowed words.",
    )
    assist.add_argument(
        "-top",
        type=int,
        default=TOP_SUGGESTIONS,
        help=f"Number of suggestions per round (default: {TOP_SUGGESTIONS}).",
    )
    assist.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for ranking suggestions (default: CPU count).",
    )

    play = subparsers.add_parser("play", help="Play a game against a random secret word.")
    play.add_argument(
        "word_file",
        type=argparse.FileType("rb"),
        help="The list of all allowed words.",
    )
    play.add_argument(
        "-seed",
        type=int,
        default=None,
        help="Seed for drawing the secret word (default: random).",
    )
    play.add_argument(
        "-auto",
        action="store_true",
        help="Let the solver play the game itself.",
    )
    play.add_argument(
        "-opening",
        type=str,
        default=DEFAULT_OPENING,
        help=f"Opening word for -auto games (default: {DEFAULT_OPENING}).",
    )
    play.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for -auto guess selection (default: CPU count).",
    )

    batch = subparsers.add_parser(
        "batch",
        help="Run a batch of simulated games to measure the algorithm's performance.",
    )
    batch.add_argument(
        "word_file",
        type=argparse.FileType("rb"),
        help="The list of all allowed words.",
    )
    batch.add_argument(
        "solution_file",
        type=argparse.FileType("rb"),
        help="The list of words to use as solutions for the games.",
    )
    batch.add_argument(
        "-opening",
        type=str,
        default=DEFAULT_OPENING,
        help=f"Fixed first guess of every game (default: {DEFAULT_OPENING}).",
    )
    batch.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for parallel games (default: CPU count).",
    )
    batch.add_argument(
        "-progress",
        choices=("bar", "off"),
        default="bar",
        help="Progress output style (default: bar).",
    )

    rank = subparsers.add_parser("rank", help="Rank every word by entropy over the full list.")
    rank.add_argument(
        "word_file",
        type=argparse.FileType("rb"),
        help="The list of all allowed words.",
    )
    rank.add_argument(
        "-top",
        type=int,
        default=TOP_RANKED,
        help=f"Number of words to show (default: {TOP_RANKED}).",
    )
    rank.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes (default: CPU count).",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    words = read_word_file(args.word_file)

    if args.command == "assist":
        run_assist(words, args.top, args.workers)
        return

    if args.command == "play":
        run_play(words, args.seed, args.auto, parse_word_arg(args.opening), args.workers)
        return

    if args.command == "batch":
        solutions = read_word_file(args.solution_file)
        run_batch_mode(
            words, solutions, parse_word_arg(args.opening), args.workers, args.progress
        )
        return

    run_rank(words, args.top, args.workers)


if __name__ == "__main__":
    main()
