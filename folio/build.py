"""Site building functionality for Folio.

This module contains the pipeline that turns a source tree into a site.
It prepares the output directory, copies assets, discovers Markdown files
and processes each one on its own worker thread.

Key functions:
- build_site: Run the full pipeline for a source and output root.
- build_project: Load folio.yaml from a project and run build_site.
- load_config: Loads site configuration from folio.yaml.
- process_markdown_file: Build the page for a single Markdown file.

Failure handling:
- Preparing the output directory and walking the source tree are fatal.
- A failed assets copy is logged and the build continues.
- A failed document is logged with its path; its siblings still build.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .assets import copy_tree
from .content import assemble_page
from .errors import (
    AssetCopyError,
    BuildError,
    EnumerationError,
    FolioError,
    ParseError,
    RenderError,
    SetupError,
    TemplateError,
    UnknownThemeError,
)
from .extractors import parse_frontmatter
from .protocols import ContentRenderer
from .renderers import MarkdownRenderer
from .styles import DEFAULT_THEME, extract_css
from .templates import render_layout
from .utils import derive_output_path, ensure_clean_dir, is_markdown

logger = logging.getLogger(__name__)

CONFIG_FILE = "folio.yaml"

DEFAULT_CONFIG = {
    "source_dir": "src",
    "output_dir": "dist",
    "assets_dir": "assets",
    "layout": "layout.html",
    "code_style": DEFAULT_THEME,
    "workers": None,
}

# Config keys that must hold a non-empty string
_PATH_KEYS = ("source_dir", "output_dir", "assets_dir", "layout", "code_style")

_ERROR_LABELS = {
    ParseError: "Invalid front matter",
    RenderError: "Markdown conversion failed",
    UnknownThemeError: "Highlighting theme error",
    TemplateError: "Layout error",
    OSError: "I/O error",
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        output_dir: Directory where the site was built.
        written: Output paths of the pages that were written.
        skipped: Source paths of unpublished documents.
        failed: Errors for the documents that could not be built.
    """

    output_dir: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[BuildError] = field(default_factory=list)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        SetupError: If folio.yaml cannot be parsed or holds invalid values.
    """
    config_path = project_root / CONFIG_FILE
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise SetupError(f"Failed to read {config_path}: {exc}") from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    _validate_config(config, config_path)
    return config


def _validate_config(config: dict[str, Any], config_path: Path) -> None:
    for key in _PATH_KEYS:
        value = config[key]
        if not isinstance(value, str) or not value.strip():
            raise SetupError(
                f"{config_path}: {key!r} must be a non-empty string, got {value!r}"
            )
    workers = config["workers"]
    if workers is not None and (
        isinstance(workers, bool) or not isinstance(workers, int) or workers < 1
    ):
        raise SetupError(
            f"{config_path}: 'workers' must be a positive integer or null, got {workers!r}"
        )


def prepare_output_dir(output_root: Path) -> None:
    """Remove the output directory if present and create it empty.

    Raises:
        SetupError: If the directory cannot be removed or created.
    """
    try:
        ensure_clean_dir(output_root)
    except OSError as exc:
        raise SetupError(
            f"Failed to prepare destination directory {output_root}: {exc}"
        ) from exc


def collect_markdown_files(source_root: Path, exclude: Path | None = None) -> list[Path]:
    """Find every Markdown file under the source root.

    Args:
        source_root: Root of the source tree.
        exclude: Optional directory to leave out of the walk, typically an
            output directory nested inside the source tree.

    Returns:
        Sorted list of paths whose name ends in ``.md``.

    Raises:
        EnumerationError: If any directory cannot be read, including a
            missing source root.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    excluded = exclude.resolve() if exclude is not None else None
    files: list[Path] = []
    try:
        for dirpath, dirnames, filenames in os.walk(source_root, onerror=_raise):
            parent = Path(dirpath)
            dirnames[:] = sorted(
                d
                for d in dirnames
                if excluded is None or (parent / d).resolve() != excluded
            )
            files.extend(parent / name for name in filenames if is_markdown(parent / name))
    except OSError as exc:
        raise EnumerationError(
            f"Error collecting markdown files under {source_root}: {exc}"
        ) from exc
    return sorted(files)


def process_markdown_file(
    md_path: Path,
    source_root: Path,
    output_root: Path,
    layout_path: Path,
    renderer: ContentRenderer,
    code_style: str = DEFAULT_THEME,
) -> Path | None:
    """Build and write the page for one Markdown file.

    Args:
        md_path: Markdown source file.
        source_root: Root of the source tree.
        output_root: Root of the output tree.
        layout_path: Layout template to render into.
        renderer: Shared Markdown renderer.
        code_style: Highlighting theme used unless the document sets ``css``.

    Returns:
        Path of the written HTML file, or None if the document is unpublished.

    Raises:
        BuildError: If any step fails for this document.
    """
    try:
        metadata, body = parse_frontmatter(md_path.read_bytes())
        if not metadata.published:
            logger.debug("Skipping unpublished document %s", md_path)
            return None

        content_html = renderer.render(body)
        inline_css = extract_css(metadata.css or code_style)
        page = assemble_page(metadata, content_html, inline_css, metadata.js or "", md_path)
        output = render_layout(page, layout_path)

        target = derive_output_path(md_path, source_root, output_root)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(output)
    except (FolioError, OSError) as exc:
        raise BuildError(md_path, _format_error_message(exc), exc) from exc

    logger.info("Wrote %s", target)
    return target


def build_site(
    source_root: Path,
    output_root: Path,
    layout_path: Path | None = None,
    assets_dir: Path | None = None,
    code_style: str = DEFAULT_THEME,
    workers: int | None = None,
    renderer: ContentRenderer | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        source_root: Directory containing the Markdown documents.
        output_root: Directory to build into; wiped first.
        layout_path: Layout template, defaults to ``source_root/layout.html``.
        assets_dir: Assets tree, defaults to ``source_root/assets``.
        code_style: Default highlighting theme.
        workers: Maximum number of worker threads; None runs one per file.
        renderer: Optional custom content renderer.

    Returns:
        BuildResult listing written, skipped and failed documents.

    Raises:
        SetupError: If the output directory cannot be prepared.
        EnumerationError: If the source tree cannot be walked.
    """
    layout_path = layout_path or source_root / "layout.html"
    assets_dir = assets_dir or source_root / "assets"

    resolved_source = source_root.resolve()
    resolved_output = output_root.resolve()
    if resolved_output == resolved_source or resolved_output in resolved_source.parents:
        raise SetupError(
            f"Refusing to clean {output_root}: it contains the source directory {source_root}"
        )
    prepare_output_dir(output_root)

    try:
        copy_tree(assets_dir, output_root)
    except AssetCopyError as exc:
        logger.error("Error copying assets: %s", exc)

    files = collect_markdown_files(source_root, exclude=output_root)
    result = BuildResult(output_dir=output_root)
    if not files:
        logger.warning("No markdown files found under %s", source_root)
        return result

    renderer = renderer or MarkdownRenderer()
    max_workers = workers or len(files)
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="folio") as executor:
        futures = {
            executor.submit(
                process_markdown_file,
                path,
                source_root,
                output_root,
                layout_path,
                renderer,
                code_style,
            ): path
            for path in files
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                target = future.result()
            except BuildError as exc:
                logger.error("Error processing file %s: %s", path, exc.message)
                result.failed.append(exc)
            except Exception as exc:
                logger.exception("Unexpected error processing file %s", path)
                result.failed.append(BuildError(path, _format_error_message(exc), exc))
            else:
                if target is None:
                    result.skipped.append(path)
                else:
                    result.written.append(target)

    result.written.sort()
    result.skipped.sort()
    result.failed.sort(key=lambda exc: exc.source_path)
    logger.info(
        "Built %d pages into %s (%d skipped, %d failed)",
        len(result.written),
        output_root,
        len(result.skipped),
        len(result.failed),
    )
    return result


def build_project(
    project_root: Path,
    source_dir: str | None = None,
    output_dir: str | None = None,
    code_style: str | None = None,
    workers: int | None = None,
) -> BuildResult:
    """Build a project laid out according to its folio.yaml.

    Explicit arguments override the configuration file.

    Args:
        project_root: Root directory of the project.
        source_dir: Source directory override, relative to the project.
        output_dir: Output directory override, relative to the project.
        code_style: Highlighting theme override.
        workers: Worker thread bound override.

    Returns:
        BuildResult from build_site.
    """
    config = load_config(project_root)
    source_root = project_root / (source_dir or config["source_dir"])
    output_root = project_root / (output_dir or config["output_dir"])
    return build_site(
        source_root,
        output_root,
        layout_path=source_root / config["layout"],
        assets_dir=source_root / config["assets_dir"],
        code_style=code_style or config["code_style"],
        workers=workers or config["workers"],
    )


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    for error_type, label in _ERROR_LABELS.items():
        if isinstance(exc, error_type):
            return f"{label}: {exc}"
    return f"{type(exc).__name__}: {exc}"
