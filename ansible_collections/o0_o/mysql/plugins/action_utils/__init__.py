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

"""Controller-side helpers for the o0_o.mysql action plugins."""

from __future__ import annotations

from ansible_collections.o0_o.mysql.plugins.action_utils.mysql_base import (
    MysqlBase,
)
from ansible_collections.o0_o.mysql.plugins.action_utils.resource_graph import (
    DependencyCycleError,
    DuplicateResourceError,
    Relationship,
    ResourceGraph,
    ResourceRef,
)
from ansible_collections.o0_o.mysql.plugins.action_utils.server_config import (
    PathError,
    RenderedConfig,
    ValidationError,
    render_config,
    render_content,
    validate_settings,
)

__all__ = [
    "DependencyCycleError",
    "DuplicateResourceError",
    "MysqlBase",
    "PathError",
    "Relationship",
    "RenderedConfig",
    "ResourceGraph",
    "ResourceRef",
    "ValidationError",
    "render_config",
    "render_content",
    "validate_settings",
]
