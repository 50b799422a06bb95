"""Shared pytest fixtures for orgmarks tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import pytest

from orgmarks.models import Bookmark, Folder

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

FIXED_DATE = datetime(2024, 10, 1, tzinfo=timezone.utc)

FIREFOX_EXPORT = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<meta http-equiv="Content-Security-Policy" content="default-src 'self'; script-src 'none'; img-src data: *; object-src 'none'"></meta>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks Menu</H1>

<DL><p>
    <DT><A HREF="place:parent=menu________&queryType=1" ADD_DATE="1727740800" LAST_MODIFIED="1727740800">Recent Tags</A>
    <DT><H3 ADD_DATE="1727740800" LAST_MODIFIED="1727740800" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks Toolbar</H3>
    <DL><p>
        <DT><A HREF="https://docs.fedoraproject.org/" ADD_DATE="1727740800" LAST_MODIFIED="1727740800" ICON_URI="https://docs.fedoraproject.org/favicon.ico" ICON="data:image/png;base64,AAAA">Fedora Docs</A>
        <DT><A HREF="https://fedoramagazine.org/" ADD_DATE="1727740800" LAST_MODIFIED="1727740800" SHORTCUTURL="magazine" TAGS="news">Fedora Magazine</A>
        <DT><H3 ADD_DATE="1727740800" LAST_MODIFIED="1727740800">Fedora Project</H3>
        <DL><p>
            <DT><H3 ADD_DATE="1727740800" LAST_MODIFIED="1727740800">More Downloads</H3>
            <DL><p>
                <DT><A HREF="https://spins.fedoraproject.org/" ADD_DATE="1727740800" LAST_MODIFIED="1727740800" TAGS="cinnamon,kde,lxde,lxqt,mate,soas,xfce">Fedora Spins</A>
            </DL><p>
        </DL><p>
    </DL><p>
    <DT><H3 ADD_DATE="1727740800" LAST_MODIFIED="1727740800">Email</H3>
    <DL><p>
        <DT><A HREF="https://mail.google.com" ADD_DATE="1727740800" LAST_MODIFIED="1727740800" TAGS="email, google">Gmail</A>
    </DL><p>
</DL>
"""

SAMPLE_ORG = """* Bookmarks Toolbar
** Fedora Docs
[[https://docs.fedoraproject.org/]]

** Fedora Magazine                                                        :news:
#+SHORTCUTURL: magazine
[[https://fedoramagazine.org/]]

** Fedora Project
*** More Downloads
**** Fedora Spins                     :cinnamon:kde:lxde:lxqt:mate:soas:xfce:
[[https://spins.fedoraproject.org/]]

* Email
** Gmail                                                          :email:google:
[[https://mail.google.com]]
Personal email

"""


@pytest.fixture
def sample_tree() -> Folder:
    """Small tree with nested folders, tags, a shortcut and a description."""
    spins = Bookmark(
        url="https://spins.fedoraproject.org/",
        title="Fedora Spins",
        tags=["cinnamon", "kde", "lxde", "lxqt", "mate", "soas", "xfce"],
        add_date=FIXED_DATE,
        last_modified=FIXED_DATE,
    )
    more_downloads = Folder(
        title="More Downloads", children=[spins], add_date=FIXED_DATE, last_modified=FIXED_DATE,
    )
    fedora_project = Folder(
        title="Fedora Project",
        children=[more_downloads],
        add_date=FIXED_DATE,
        last_modified=FIXED_DATE,
    )
    toolbar = Folder(
        title="Bookmarks Toolbar",
        children=[
            Bookmark(
                url="https://docs.fedoraproject.org/",
                title="Fedora Docs",
                add_date=FIXED_DATE,
                last_modified=FIXED_DATE,
            ),
            Bookmark(
                url="https://fedoramagazine.org/",
                title="Fedora Magazine",
                tags=["news"],
                shortcut_url="magazine",
                add_date=FIXED_DATE,
                last_modified=FIXED_DATE,
            ),
            fedora_project,
        ],
        add_date=FIXED_DATE,
        last_modified=FIXED_DATE,
    )
    email = Folder(
        title="Email",
        children=[
            Bookmark(
                url="https://mail.google.com",
                title="Gmail",
                tags=["email", "google"],
                description="Personal email",
                add_date=FIXED_DATE,
                last_modified=FIXED_DATE,
            ),
        ],
        add_date=FIXED_DATE,
        last_modified=FIXED_DATE,
    )
    return Folder(
        title="Bookmarks Menu",
        children=[toolbar, email],
        add_date=FIXED_DATE,
        last_modified=FIXED_DATE,
    )


@pytest.fixture
def sample_export_html(tmp_path: Path) -> Path:
    """Write a Firefox-style bookmark export and return its path."""
    p = tmp_path / "firefox.html"
    p.write_text(FIREFOX_EXPORT, encoding="utf-8")
    return p


@pytest.fixture
def sample_org(tmp_path: Path) -> Path:
    """Write an Org bookmark outline and return its path."""
    p = tmp_path / "bookmarks.org"
    p.write_text(SAMPLE_ORG, encoding="utf-8")
    return p


@pytest.fixture
def folder_chain() -> Callable[..., Folder]:
    """Factory for a root with ``depth`` singly nested folders, optionally ending in ``leaf``."""

    def _build(depth: int, leaf: Bookmark | None = None) -> Folder:
        root = Folder(title="Root")
        current = root
        for level in range(1, depth + 1):
            child = Folder(title=f"Level {level}")
            current.add_child(child)
            current = child
        if leaf is not None:
            current.add_child(leaf)
        return root

    return _build
