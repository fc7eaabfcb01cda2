# vim: ts=4:sw=4:sts=4:et:ft=python
# -*- mode: python; tab-width: 4; indent-tabs-mode: nil; -*-
#
# GNU General Public License v3.0+
# SPDX-License-Identifier: GPL-3.0-or-later
# (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)
#
# Copyright (c) 2025 oØ.o (@o0-o)
#
# This file is part of the o0_o.mysql Ansible Collection.

from __future__ import annotations

from dataclasses import dataclass
from graphlib import CycleError
from typing import Optional

import pytest

from ansible_collections.o0_o.mysql.plugins.action_utils import (
    DependencyCycleError,
    DuplicateResourceError,
    ResourceGraph,
    ResourceRef,
    render_config,
)

BASE = ResourceRef("File", "/etc/mysql/my.cnf")
RESTART = ResourceRef("Exec", "mysqld-restart")


@dataclass(frozen=True)
class Declared:
    """Minimal declaration with the attributes the graph reads."""

    resource: ResourceRef
    require: ResourceRef
    notify: Optional[ResourceRef] = None


@pytest.fixture
def graph() -> ResourceGraph:
    """Graph holding a notifying and a silent option file."""
    graph = ResourceGraph()
    render_config("server", {"mysqld": {"a": "b"}}, graph=graph)
    render_config(
        "client", {"client": {"c": "d"}}, notify_service=False, graph=graph
    )
    return graph


def test_relationships_in_declaration_order(graph) -> None:
    """Test relationships are listed as they were declared."""
    assert [rel.to_dict() for rel in graph.relationships()] == [
        {
            "kind": "require",
            "source": "File[/etc/mysql/conf.d/server.cnf]",
            "target": "File[/etc/mysql/my.cnf]",
        },
        {
            "kind": "notify",
            "source": "File[/etc/mysql/conf.d/server.cnf]",
            "target": "Exec[mysqld-restart]",
        },
        {
            "kind": "require",
            "source": "File[/etc/mysql/conf.d/client.cnf]",
            "target": "File[/etc/mysql/my.cnf]",
        },
    ]


def test_relationship_filters(graph) -> None:
    """Test filtering relationships by source and kind."""
    client = ResourceRef("File", "/etc/mysql/conf.d/client.cnf")

    assert len(graph.relationships(kind="require")) == 2
    assert len(graph.relationships(kind="notify")) == 1
    assert graph.requires(client) == [BASE]
    assert graph.notifies(client) == []


def test_contains_and_len(graph) -> None:
    """Test only declared resources count as members."""
    assert len(graph) == 2
    assert ResourceRef("File", "/etc/mysql/conf.d/server.cnf") in graph
    assert BASE not in graph
    assert RESTART not in graph


def test_duplicate_declaration(graph) -> None:
    """Test declaring the same file twice is refused."""
    with pytest.raises(DuplicateResourceError, match="server.cnf"):
        render_config("server", {}, graph=graph)


def test_apply_order(graph) -> None:
    """Test required files come first and notified actions last."""
    order = graph.apply_order()
    server = ResourceRef("File", "/etc/mysql/conf.d/server.cnf")
    client = ResourceRef("File", "/etc/mysql/conf.d/client.cnf")

    assert set(order) == {BASE, RESTART, server, client}
    assert order.index(BASE) < order.index(server)
    assert order.index(BASE) < order.index(client)
    assert order.index(server) < order.index(RESTART)


def test_apply_order_detects_cycles() -> None:
    """Test a require loop raises DependencyCycleError."""
    first = ResourceRef("File", "/a.cnf")
    second = ResourceRef("File", "/b.cnf")
    graph = ResourceGraph()
    graph.declare(Declared(first, second))
    graph.declare(Declared(second, first))

    with pytest.raises(DependencyCycleError, match="cycle") as excinfo:
        graph.apply_order()

    assert isinstance(excinfo.value.__cause__, CycleError)


def test_notifications(graph) -> None:
    """Test only changed, notifying resources trigger actions."""
    server = ResourceRef("File", "/etc/mysql/conf.d/server.cnf")
    client = ResourceRef("File", "/etc/mysql/conf.d/client.cnf")

    assert graph.notifications([]) == []
    assert graph.notifications([client]) == []
    assert graph.notifications([server]) == [RESTART]


def test_notifications_are_deduplicated() -> None:
    """Test two changed files notifying one action trigger it once."""
    graph = ResourceGraph()
    first = render_config("a", {}, graph=graph)
    second = render_config("b", {}, graph=graph)

    assert graph.notifications([first.resource, second.resource]) == [RESTART]
