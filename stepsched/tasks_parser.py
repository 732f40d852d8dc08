"""
tasks_parser.py

Parsing precedence instructions and building the PrecedenceGraph.

Two line formats are understood:
  sentence:  Step C must be finished before step A can begin.
  edges:     C A      (or)      C -> A
Blank lines and lines starting with '#' are skipped.
"""

import logging
from collections import namedtuple

from stepsched.errors import MalformedInput
from stepsched.graph import PrecedenceGraph
from stepsched.steps import Step

logger = logging.getLogger(__name__)

SENTENCE_TEMPLATE = "Step C must be finished before step A can begin."
REQUIRED_POS = 5
STEP_POS = 36
FORMATS = ("sentence", "edges")

Instruction = namedtuple("Instruction", ["required", "step"])


def parse_sentence(line):
    """
    Decode one fixed-template sentence. The two identifiers sit at fixed
    offsets; everything else must match the template character for character.
    """
    if len(line) != len(SENTENCE_TEMPLATE):
        raise MalformedInput("wrong length for a precedence sentence.")
    for i, (got, want) in enumerate(zip(line, SENTENCE_TEMPLATE)):
        if i in (REQUIRED_POS, STEP_POS):
            continue
        if got != want:
            raise MalformedInput(f"unexpected text at column {i + 1}: {line!r}")
    return Instruction(Step.from_char(line[REQUIRED_POS]), Step.from_char(line[STEP_POS]))


def parse_edge(line):
    """Decode 'C A' or 'C -> A'."""
    parts = [p for p in line.split() if p != "->"]
    if len(parts) != 2:
        raise MalformedInput(f"expected two step names, got {line!r}")
    return Instruction(Step.from_char(parts[0]), Step.from_char(parts[1]))


def parse_instruction(line, fmt="sentence"):
    if fmt == "sentence":
        return parse_sentence(line)
    if fmt == "edges":
        return parse_edge(line)
    raise ValueError(f"Unknown input format '{fmt}' (expected one of {', '.join(FORMATS)}).")


def parse_instructions(lines, fmt="sentence"):
    """
    Parse an iterable of lines (or one multi-line string).
    Return a list of Instruction; MalformedInput messages carry the line number.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    instructions = []
    line_num = 0
    for line in lines:
        line_num += 1
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        try:
            instructions.append(parse_instruction(line, fmt))
        except MalformedInput as e:
            raise MalformedInput(f"Line {line_num}: {e}") from e
    return instructions


def load_instructions(file_path, fmt="sentence"):
    """Read a file of instructions. Return list of Instruction."""
    with open(file_path, 'r') as f:
        return parse_instructions(f, fmt)


def build_graph(pairs):
    """
    Materialize a PrecedenceGraph from (required, step) pairs.
    No cycle or duplicate checks happen here; the consumers detect cycles.
    """
    graph = PrecedenceGraph()
    edge_count = 0
    for required, step in pairs:
        graph.add_edge(required, step)
        edge_count += 1
    logger.debug(f"Built graph with {len(graph)} steps from {edge_count} instruction(s)")
    return graph


def parse_graph(text, fmt="sentence"):
    return build_graph(parse_instructions(text, fmt))
