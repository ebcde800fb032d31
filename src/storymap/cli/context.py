"""
Shared plumbing for storymap CLI commands.

Builds the OutlineService from the global options and maps domain errors to
friendly messages and exit codes.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from pydantic import ValidationError

from storymap.cli.errors import (
    ExitCode,
    print_assignment_error,
    print_canvas_corrupted_error,
    print_error,
    print_invalid_number_error,
)
from storymap.core.canvas import (
    AssignmentError,
    CanvasFileCorruptedError,
    CanvasStore,
    OutlineService,
    OutlineServiceError,
)
from storymap.core.config import load_config
from storymap.core.numbering import InvalidNumberError

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """
    Configure logging for CLI commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_service(ctx: typer.Context) -> OutlineService:
    """Create an OutlineService honouring --canvas and the loaded config."""
    obj = ctx.obj or {}
    project_dir = Path.cwd()
    config = load_config(project_dir)

    canvas = obj.get("canvas")
    store = CanvasStore(canvas or config.canvas.path, project_dir=project_dir)
    return OutlineService(store=store, config=config, project_dir=project_dir)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn domain exceptions into error output and a non-zero exit."""
    try:
        yield
    except InvalidNumberError as e:
        print_invalid_number_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except AssignmentError as e:
        print_assignment_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except OutlineServiceError as e:
        print_error(str(e), solution="storymap show --ids  # to list elements and their ids")
        raise typer.Exit(ExitCode.USER_ERROR)
    except CanvasFileCorruptedError as e:
        print_canvas_corrupted_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except ValidationError as e:
        logger.debug("Configuration rejected", exc_info=True)
        print_error("Invalid configuration", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
