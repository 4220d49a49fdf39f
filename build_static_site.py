#!/usr/bin/env python3
"""
Static site generator for an Obsidian vault.

Features:
- Converts every .md file under the vault to .html in the output directory
- Rewrites [[wikilinks]] and ![[embeds]] into links and images
- Preserves directory structure; copies non-.md assets byte for byte
- Index page built from the folder tree of all notes
- Optional one-page-per-tag listing under tags/
- Pages rendered through Jinja2 templates (base.html, index.html, tag.html, style.css)

Usage:
  obs2web --vault ~/Notes --output ./site --tag-pages

Every run is a full rebuild: the output directory is removed first. The
first failure aborts the run and may leave a partially written site.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import stat
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from note_frontmatter import split_frontmatter
from note_tree import Note, build_note_tree, relative_to_root
from site_errors import OutputWriteError, SiteBuildError, SourceReadError, TemplateRenderError
from tag_index import TagIndex, record_note_tags
from wikilinks import rewrite_links

# -- markdown conversion --
try:
    import markdown  # type: ignore
except ImportError as exc:  # minimal helpful error
    raise SystemExit(
        "Missing dependency: markdown. Install with 'pip install markdown'"
    ) from exc


logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
MARKDOWN_EXTENSIONS = [
    "extra",
    "fenced_code",
    "tables",
    "sane_lists",
    "smarty",
    "pymdownx.magiclink",
    "pymdownx.tasklist",
    "pymdownx.tilde",
]
MARKDOWN_EXTENSION_CONFIGS = {
    # strikethrough only; a single ~ stays literal
    "pymdownx.tilde": {"subscript": False},
}
STYLESHEET = "style.css"
TAGS_DIR = "tags"


# -- configuration and results --
@dataclass
class BuildSettings:
    """Where to read from, where to write to, and what to emit."""
    vault_root: Path
    output_root: Path
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    tag_pages: bool = False


@dataclass
class BuildResult:
    output_root: Path
    notes: List[Note] = field(default_factory=list)
    tags: TagIndex = field(default_factory=dict)
    assets_copied: int = 0


# -- helpers: paths --
def is_markdown_file(path: Path) -> bool:
    return path.suffix == ".md"


def output_html_path(output_dir: Path, md_path: Path) -> Path:
    """HTML file for `md_path` inside `output_dir`. '?' is dropped from the name."""
    file_name = md_path.name.replace("?", "")
    return (output_dir / file_name).with_suffix(".html")


def href_to_root(rel_dir: Path) -> str:
    """Relative prefix from a page in `rel_dir` back to the site root, without trailing slash."""
    depth = len(rel_dir.parts)
    if depth == 0:
        return "."
    return "/".join([".."] * depth)


def iter_vault_files(vault_root: Path, skip_dir: Optional[Path] = None):
    """Yield every regular file under the vault, directories and names in sorted order.

    `skip_dir` (the output root when it sits inside the vault) is not descended into.
    """
    skip = skip_dir.resolve() if skip_dir is not None else None
    for dirpath, dirnames, filenames in os.walk(vault_root):
        dirnames[:] = sorted(d for d in dirnames if (Path(dirpath) / d).resolve() != skip)
        for fname in sorted(filenames):
            path = Path(dirpath) / fname
            if path.is_file():
                yield path


# -- helpers: output directory and assets --
def _handle_remove_readonly(func, path, exc_info):  # Windows: clear read-only then retry
    os.chmod(path, stat.S_IWRITE)
    func(path)


def prepare_output_dir(output_root: Path) -> None:
    """Remove any previous output and recreate the directory."""
    try:
        if output_root.exists():
            logger.info("Cleaning output directory: %s", output_root)
            if sys.version_info >= (3, 12):
                shutil.rmtree(output_root, onexc=_handle_remove_readonly)
            else:
                shutil.rmtree(output_root, onerror=_handle_remove_readonly)
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot prepare output directory ({exc})", output_root) from exc


def process_asset(path: Path, output_path: Path) -> None:
    """Copy a non-markdown file byte for byte."""
    logger.info("Copying asset: %s -> %s", path, output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot create directory ({exc})", output_path.parent) from exc
    try:
        shutil.copyfile(path, output_path)
    except OSError as exc:
        raise OutputWriteError(f"Cannot copy asset from {path} ({exc})", output_path) from exc


def copy_stylesheet(template_dir: Path, output_root: Path) -> None:
    source = template_dir / STYLESHEET
    if not source.is_file():
        raise SourceReadError("Stylesheet not found", source)
    try:
        shutil.copyfile(source, output_root / STYLESHEET)
    except OSError as exc:
        raise OutputWriteError(f"Cannot copy stylesheet ({exc})", output_root / STYLESHEET) from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Cannot write file ({exc})", path) from exc


# -- helpers: HTML generation --
def make_environment(template_dir: Path) -> Environment:
    if not template_dir.is_dir():
        raise TemplateRenderError("Template directory not found", template_dir)
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(),
        undefined=StrictUndefined,
    )


def render_template(env: Environment, name: str, context: Dict[str, object], target: Path) -> str:
    try:
        return env.get_template(name).render(**context)
    except TemplateError as exc:
        raise TemplateRenderError(f"Template rendering failed for {name} ({exc})", target) from exc


def convert_markdown_to_html(md_text: str) -> str:
    """Convert markdown to HTML. Raw HTML (rewritten wikilinks) passes through."""
    return markdown.markdown(
        md_text,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )


# -- pipeline --
def process_markdown_file(
    md_path: Path,
    vault_root: Path,
    output_root: Path,
    env: Environment,
    notes: List[Note],
    tags: TagIndex,
) -> Note:
    """Convert one note to HTML, write it, and register it in `notes` and `tags`."""
    logger.info("Converting markdown: %s", md_path)
    try:
        md_text = md_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read note ({exc})", md_path) from exc

    fm, body = split_frontmatter(md_text, md_path)
    title = fm.title if fm is not None and fm.title is not None else md_path.stem

    content_html = convert_markdown_to_html(rewrite_links(body))

    rel_dir = md_path.parent.relative_to(vault_root)
    out_dir = output_root / rel_dir
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot create directory ({exc})", out_dir) from exc
    html_path = output_html_path(out_dir, md_path)

    context = {
        "title": title,
        "date": fm.date if fm is not None else None,
        "tags": fm.tags if fm is not None else None,
        "relative_path": href_to_root(rel_dir),
        "content": content_html,
    }
    write_text(html_path, render_template(env, "base.html", context, html_path))
    logger.info("Wrote HTML: %s", html_path)

    note = Note(title=title, output_path=html_path)
    notes.append(note)
    if fm is not None and fm.tags:
        record_note_tags(tags, note, fm.tags)
    return note


def render_index(env: Environment, output_root: Path, notes: List[Note]) -> Path:
    index_path = output_root / "index.html"
    tree = build_note_tree(notes, output_root)
    write_text(index_path, render_template(env, "index.html", {"root": tree}, index_path))
    return index_path


def tag_page_path(tags_dir: Path, tag: str, note: Note) -> Path:
    """Page for `tag` under `tags_dir`. Tags that would land elsewhere ('..', absolute) are refused."""
    tag_path = (tags_dir / f"{tag}.html").resolve()
    try:
        tag_path.relative_to(tags_dir.resolve())
    except ValueError as exc:
        raise OutputWriteError(f"Tag {tag!r} would write outside {tags_dir}; declared by", note.output_path) from exc
    return tag_path


def render_tag_pages(env: Environment, output_root: Path, tags: TagIndex) -> List[Path]:
    """Write one listing page per tag under tags/."""
    tags_dir = output_root / TAGS_DIR
    written: List[Path] = []
    for tag, tagged in tags.items():
        tag_path = tag_page_path(tags_dir, tag, tagged[0])
        try:
            tag_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(f"Cannot create directory ({exc})", tag_path.parent) from exc
        context = {
            "tag": tag,
            "notes": [replace(n, output_path=relative_to_root(n.output_path, output_root)) for n in tagged],
            "relative_path": href_to_root(tag_path.parent.relative_to(output_root.resolve())),
        }
        write_text(tag_path, render_template(env, "tag.html", context, tag_path))
        logger.debug("Wrote tag page: %s", tag_path)
        written.append(tag_path)
    return written


def build_site(settings: BuildSettings) -> BuildResult:
    """Full rebuild of the site from the vault."""
    vault_root = settings.vault_root
    output_root = settings.output_root
    logger.info("Building site from %s", vault_root)

    env = make_environment(settings.template_dir)
    prepare_output_dir(output_root)

    result = BuildResult(output_root=output_root)
    for path in iter_vault_files(vault_root, skip_dir=output_root):
        if is_markdown_file(path):
            process_markdown_file(path, vault_root, output_root, env, result.notes, result.tags)
        else:
            process_asset(path, output_root / path.relative_to(vault_root))
            result.assets_copied += 1

    copy_stylesheet(settings.template_dir, output_root)
    render_index(env, output_root, result.notes)
    if settings.tag_pages:
        render_tag_pages(env, output_root, result.tags)

    logger.info("Site built successfully: %d notes, %d assets", len(result.notes), result.assets_copied)
    return result


# -- CLI --
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a static HTML site from an Obsidian vault.")
    parser.add_argument(
        "-v",
        "--vault",
        type=Path,
        required=True,
        help="Path to the Obsidian vault",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("./site"),
        help="Output folder for generated site (removed and recreated on every run)",
    )
    parser.add_argument(
        "--templates",
        type=Path,
        default=DEFAULT_TEMPLATE_DIR,
        help="Folder holding base.html, index.html, tag.html and style.css",
    )
    parser.add_argument(
        "--tag-pages",
        action="store_true",
        help="Also write one page per frontmatter tag under tags/",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug detail",
    )
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> BuildSettings:
    return BuildSettings(
        vault_root=args.vault.expanduser().resolve(),
        output_root=args.output.expanduser().resolve(),
        template_dir=args.templates.expanduser().resolve(),
        tag_pages=args.tag_pages,
    )


def main(argv: Optional[List[str]] = None) -> None:
    # parse CLI args
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")
    settings = settings_from_args(args)

    if not settings.vault_root.exists() or not settings.vault_root.is_dir():
        raise SystemExit(f"Vault directory not found: {settings.vault_root}")

    try:
        build_site(settings)
    except SiteBuildError as exc:
        raise SystemExit(f"Build failed: {exc}") from exc

    print(f"Site generated at: {settings.output_root}")


if __name__ == "__main__":
    main()
