"""Lazily-built container shared by the CLI commands of one invocation."""

from __future__ import annotations

import click

from perfumery.infrastructure.bootstrap import Container, build_container


def current_container() -> Container:
    ctx = click.get_current_context()
    root = ctx.find_root()
    if root.obj is None:
        root.obj = build_container()
    return root.obj
