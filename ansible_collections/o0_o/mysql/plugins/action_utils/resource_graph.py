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

"""
Declarative resource relationships.

Rendered configuration files do not trigger restarts or order
themselves. Instead they declare ``require`` and ``notify`` edges into
a :class:`ResourceGraph`, which the caller inspects to decide what runs
first and which actions a change should trigger.
"""

from __future__ import annotations

from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import Any, Dict, Iterable, List, Optional

from ansible.errors import AnsibleActionFail
from ansible.utils.display import Display

display = Display()

REQUIRE = "require"
NOTIFY = "notify"


class DuplicateResourceError(AnsibleActionFail):
    """A resource was declared more than once in the same graph."""


class DependencyCycleError(AnsibleActionFail):
    """The declared relationships cannot be ordered."""


@dataclass(frozen=True)
class ResourceRef:
    """Reference to a resource, rendered as ``Type[title]``."""

    type: str
    title: str

    def __str__(self) -> str:
        return f"{self.type}[{self.title}]"


@dataclass(frozen=True)
class Relationship:
    kind: str
    source: ResourceRef
    target: ResourceRef

    def to_dict(self) -> Dict[str, str]:
        return {
            "kind": self.kind,
            "source": str(self.source),
            "target": str(self.target),
        }


class ResourceGraph:
    """
    Registry of declared resources and the edges between them.

    A ``require`` relationship means the target is applied before the
    source. A ``notify`` relationship means a change to the source
    triggers the target, which therefore also runs after it.
    """

    def __init__(self) -> None:
        self._resources: Dict[ResourceRef, Any] = {}
        self._relationships: List[Relationship] = []

    def __contains__(self, ref: object) -> bool:
        return ref in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def declare(self, rendered: Any) -> ResourceRef:
        """
        Register a rendered resource and its relationships.

        :param rendered: Object exposing ``resource``, ``require`` and
            an optional ``notify`` reference
        :returns ResourceRef: The reference of the declared resource
        :raises DuplicateResourceError: If the resource was already
            declared
        """
        ref = rendered.resource
        if ref in self._resources:
            raise DuplicateResourceError(
                f"Duplicate declaration: {ref} is already declared"
            )

        self._resources[ref] = rendered
        self._relationships.append(Relationship(REQUIRE, ref, rendered.require))
        if rendered.notify is not None:
            self._relationships.append(
                Relationship(NOTIFY, ref, rendered.notify)
            )

        display.vvvv(f"Declared {ref}")
        return ref

    def relationships(
        self,
        source: Optional[ResourceRef] = None,
        kind: Optional[str] = None,
    ) -> List[Relationship]:
        return [
            rel
            for rel in self._relationships
            if (source is None or rel.source == source)
            and (kind is None or rel.kind == kind)
        ]

    def requires(self, ref: ResourceRef) -> List[ResourceRef]:
        return [rel.target for rel in self.relationships(ref, REQUIRE)]

    def notifies(self, ref: ResourceRef) -> List[ResourceRef]:
        return [rel.target for rel in self.relationships(ref, NOTIFY)]

    def apply_order(self) -> List[ResourceRef]:
        """
        Order every resource that appears in the graph.

        :returns List[ResourceRef]: Resources with each one listed
            after everything it requires and before everything it
            notifies
        :raises DependencyCycleError: If the relationships form a cycle
        """
        sorter = TopologicalSorter()
        for ref in self._resources:
            sorter.add(ref)
        for rel in self._relationships:
            if rel.kind == REQUIRE:
                sorter.add(rel.source, rel.target)
            else:
                sorter.add(rel.target, rel.source)

        try:
            return list(sorter.static_order())
        except CycleError as e:
            cycle = " -> ".join(str(ref) for ref in e.args[1])
            raise DependencyCycleError(f"Dependency cycle: {cycle}") from e

    def notifications(self, changed: Iterable[ResourceRef]) -> List[ResourceRef]:
        """Return the actions notified by the changed resources."""
        pending: List[ResourceRef] = []
        for ref in changed:
            for target in self.notifies(ref):
                if target not in pending:
                    pending.append(target)
        return pending
