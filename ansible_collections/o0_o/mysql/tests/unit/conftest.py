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

from typing import Generator
from unittest.mock import MagicMock

import pytest

from ansible_collections.o0_o.mysql.plugins.action_utils import MysqlBase
from ansible_collections.o0_o.mysql.tests.utils import (
    FakeAction,
    fake_copy_result,
)


@pytest.fixture
def copy_action() -> FakeAction:
    """Copy action stand-in that reports a changed file."""
    return FakeAction(fake_copy_result("/etc/mysql/conf.d/test_config.cnf"))


@pytest.fixture
def base(copy_action) -> Generator[MysqlBase, None, None]:
    """Create a mocked MysqlBase instance for unit testing.

    Provides a MysqlBase instance with mocked Ansible dependencies.
    The action loader hands out ``copy_action`` for every plugin
    name, so delegated writes never touch a host.

    :returns Generator[MysqlBase, None, None]: Configured MysqlBase
        instance with mocked dependencies
    """
    task = MagicMock()
    task.async_val = False
    task.check_mode = False
    task.action = "o0_o.mysql.server_config"
    task.args = {}

    base = MysqlBase(
        task=task,
        connection=MagicMock(),
        play_context=MagicMock(),
        loader=MagicMock(),
        templar=MagicMock(),
        shared_loader_obj=MagicMock(),
    )

    # ActionBase ignores shared_loader_obj on newer ansible-core
    base._shared_loader_obj = MagicMock()
    base._shared_loader_obj.action_loader.get.return_value = copy_action

    return base
