"""Render k-SAT sentences as pictures."""

import argparse
import logging
import math
import sys
from typing import List, Optional

from tqdm import tqdm

from renderer import DEFAULT_BETA, SATArtRenderer, save_image, show_image
from sat_errors import SATArtException
from sat_sentence import SATSentence

logger = logging.getLogger(__name__)

VERSION = "SAT ART version 1.0"

# defaults for randomly generated sentences
DEFAULT_N_CLAUSES = 32
DEFAULT_N_VARIABLES = 16
DEFAULT_K = 3


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but argument errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _non_negative_float(value: str) -> float:
    try:
        beta = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid beta value: {value!r}") from None
    if not math.isfinite(beta) or beta < 0.0:
        raise argparse.ArgumentTypeError(f"beta must be a finite non-negative number, got {value}")
    return beta


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def _token(value: str) -> str:
    if value.startswith("-"):
        raise argparse.ArgumentTypeError(f"{value!r} cannot start with '-'")
    return value


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="sat_art",
        description="Renders k-SAT sentences as pictures: one pixel per assignment, "
                    "laid out along a Hilbert curve in Gray code order.")
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("-b", dest="beta", type=_non_negative_float, default=DEFAULT_BETA,
                        help="rate of decay of the image shader (default: %(default)s)")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", dest="file_in", type=_token, metavar="dimacs_file",
                        help="DIMACS (.cnf) file to read the sentence from")
    source.add_argument("--random", action="store_true",
                        help="generate a random sentence instead of reading a file")

    parser.add_argument("-c", dest="n_clauses", type=_positive_int, default=DEFAULT_N_CLAUSES,
                        help="number of clauses of the random sentence (default: %(default)s)")
    parser.add_argument("-v", dest="n_variables", type=_positive_int, default=DEFAULT_N_VARIABLES,
                        help="number of variables of the random sentence (default: %(default)s)")
    parser.add_argument("-s", dest="seed", type=_token, default="",
                        help="seed string for the random sentence")
    parser.add_argument("-k", dest="k", type=_positive_int, default=DEFAULT_K,
                        help="literals per clause of the random sentence (default: %(default)s)")
    parser.add_argument("-o", dest="file_out", type=_token, metavar="dimacs_file_out",
                        help="DIMACS (.cnf) file to save the sentence to")

    parser.add_argument("--workers", type=_positive_int, default=1,
                        help="number of render threads (default: %(default)s)")
    parser.add_argument("--no-progress", action="store_true",
                        help="do not show a progress bar")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    parser.add_argument("img_out", nargs="?", type=_token,
                        help="output image, format from the extension (shown on screen if omitted)")
    return parser


def load_sentence(args: argparse.Namespace) -> SATSentence:
    if args.random:
        sentence = SATSentence.random_ksat(args.n_clauses, args.n_variables, args.seed, args.k)
        comment = f"Seed: {args.seed}"
    else:
        sentence = SATSentence.read_dimacs(args.file_in)
        logger.info("Read %d clauses over %d variables from %s",
                    sentence.num_clauses, sentence.num_variables(), args.file_in)
        comment = f"Source: {args.file_in}"

    if args.file_out:
        sentence.write_dimacs(args.file_out, comment)
    return sentence


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.random and args.n_variables > args.n_clauses:
        parser.error(f"number of clauses ({args.n_clauses}) must be at least "
                     f"the number of variables ({args.n_variables})")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        sentence = load_sentence(args)
        renderer = SATArtRenderer(sentence, beta=args.beta, max_workers=args.workers)

        with tqdm(total=renderer.num_pixels, unit="px", unit_scale=True,
                  disable=args.no_progress) as bar:
            def report(fraction: float):
                bar.update(round(fraction * renderer.num_pixels) - bar.n)

            pixels = renderer.render(progress=report)

        if args.img_out:
            save_image(pixels, args.img_out)
        else:
            show_image(pixels, "SAT Art")
    except (SATArtException, ValueError, OSError) as e:
        logger.error("Fatal error- %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
