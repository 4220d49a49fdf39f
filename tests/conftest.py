"""Shared fixtures: small vaults written to a temporary directory."""

from pathlib import Path

import pytest

from build_static_site import BuildSettings, DEFAULT_TEMPLATE_DIR


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01\x02binary"


def write_files(root: Path, files: dict) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def vault(tmp_path):
    """The two-note vault: a titled, tagged note linking to an untitled one."""
    root = tmp_path / "vault"
    write_files(
        root,
        {
            "notes/a.md": "---\ntitle: Alpha\ntags: [intro]\n---\n[[b]]\n",
            "notes/b.md": "Just a body.\n",
        },
    )
    return root


@pytest.fixture
def settings(vault, tmp_path):
    return BuildSettings(vault_root=vault, output_root=tmp_path / "site", template_dir=DEFAULT_TEMPLATE_DIR)
