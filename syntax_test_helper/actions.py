#!/usr/bin/env python3
"""
Action implementations.

Each action validates the flags it needs before touching any file, drives
the syntax tooling and either writes its result to -out or hands it back
to the driver for standard output.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterator

from .arguments import ArgumentStore, resolve_serialization_format
from .errors import CollaboratorError
from .models import Action, ActionOutcome, Flag
from .reporter import USAGE
from .syntax import (
    ClassifiedSyntaxTreePrinter,
    NodePrinter,
    SyntaxClassifier,
    SyntaxToolingError,
    SyntaxTreeDeserializer,
    SyntaxTreeParser,
)
from .utils.file_utils import ensure_readable, read_file_bytes, write_text_file

logger = logging.getLogger(__name__)


@contextmanager
def syntax_tooling() -> Iterator[None]:
    """Surface syntax tooling failures as CollaboratorError, message unchanged."""
    try:
        yield
    except SyntaxToolingError as e:
        raise CollaboratorError(e) from e
    except RecursionError:
        # Trees that deserialize can still be too deep to walk
        raise CollaboratorError(SyntaxToolingError("Syntax tree nesting too deep to render")) from None


def perform_deserialize(args: ArgumentStore) -> ActionOutcome:
    """Deserialize -pre-edit-tree and write its source text to -out."""
    pre_edit_tree_path = args.get_required_path(Flag.PRE_EDIT_TREE)
    out_path = args.get_required_path(Flag.OUT)
    serialization_format = resolve_serialization_format(args)

    file_data = read_file_bytes(pre_edit_tree_path)

    with syntax_tooling():
        deserializer = SyntaxTreeDeserializer()
        tree = deserializer.deserialize(file_data, serialization_format)
        source_representation = tree.description

    write_text_file(out_path, source_representation)
    return ActionOutcome.silent(Action.DESERIALIZE)


def perform_round_trip(args: ArgumentStore) -> ActionOutcome:
    """Apply -incr-tree on top of -pre-edit-tree and write the result to -out."""
    pre_edit_tree_path = args.get_required_path(Flag.PRE_EDIT_TREE)
    incr_tree_path = args.get_required_path(Flag.INCR_TREE)
    out_path = args.get_required_path(Flag.OUT)
    serialization_format = resolve_serialization_format(args)

    pre_edit_tree_data = read_file_bytes(pre_edit_tree_path)
    incr_tree_data = read_file_bytes(incr_tree_path)

    with syntax_tooling():
        # One session: the incremental payload refers to nodes of the pre-edit tree
        deserializer = SyntaxTreeDeserializer()
        deserializer.deserialize(pre_edit_tree_data, serialization_format)
        logger.debug("Primed deserializer with %d nodes", deserializer.cached_node_count)
        tree = deserializer.deserialize(incr_tree_data, serialization_format)
        source_representation = tree.description

    write_text_file(out_path, source_representation)
    return ActionOutcome.silent(Action.INCREMENTAL_ROUND_TRIP)


def perform_classify_syntax(args: ArgumentStore) -> ActionOutcome:
    """Parse -source-file and render it with classification markup."""
    source_path = args.get_required_path(Flag.SOURCE_FILE)
    swiftc_path = args.get_path(Flag.SWIFTC)
    out_path = args.get_path(Flag.OUT)

    ensure_readable(source_path)

    with syntax_tooling():
        tree = SyntaxTreeParser.parse(source_path, swiftc=swiftc_path)
        classifications = SyntaxClassifier.classify_tokens_in_tree(tree)
        printer = ClassifiedSyntaxTreePrinter(classifications=classifications)
        result = printer.print(tree)

    if out_path is not None:
        write_text_file(out_path, result)
        return ActionOutcome.silent(Action.CLASSIFY_SYNTAX_COLORING)
    return ActionOutcome(Action.CLASSIFY_SYNTAX_COLORING, stdout=result + "\n")


def print_syntax_tree(args: ArgumentStore) -> ActionOutcome:
    """Parse -source-file and print its node structure."""
    source_path = args.get_required_path(Flag.SOURCE_FILE)
    swiftc_path = args.get_path(Flag.SWIFTC)

    ensure_readable(source_path)

    with syntax_tooling():
        tree = SyntaxTreeParser.parse(source_path, swiftc=swiftc_path)
        # Unknown nodes raise SyntaxContractViolation, which propagates past the driver
        result = NodePrinter().print(tree)
    return ActionOutcome(Action.PRINT_TREE_STRUCTURE, stdout=result)


def print_help(args: ArgumentStore) -> ActionOutcome:
    return ActionOutcome(Action.HELP, stdout=USAGE)


ACTION_HANDLERS: Dict[Action, Callable[[ArgumentStore], ActionOutcome]] = {
    Action.DESERIALIZE: perform_deserialize,
    Action.INCREMENTAL_ROUND_TRIP: perform_round_trip,
    Action.CLASSIFY_SYNTAX_COLORING: perform_classify_syntax,
    Action.PRINT_TREE_STRUCTURE: print_syntax_tree,
    Action.HELP: print_help,
}


def run_action(action: Action, args: ArgumentStore) -> ActionOutcome:
    """Run the handler registered for an action."""
    logger.debug("Running action %s", action.flag)
    return ACTION_HANDLERS[action](args)
