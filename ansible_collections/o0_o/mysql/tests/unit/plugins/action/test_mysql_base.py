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

import pytest

from ansible.errors import AnsibleActionFail


def test_run_action_refuses_recursion(base) -> None:
    """Test that delegating to the running action is refused."""
    with pytest.raises(AnsibleActionFail, match="infinite recursion"):
        base._run_action("O0_O.mysql.server_config ", {}, task_vars={})


def test_run_action_passes_args_and_task_vars(base, copy_action) -> None:
    """Test the delegated task gets exactly the given arguments."""
    task_vars = {"inventory_hostname": "db1"}

    result = base._run_action(
        "ansible.legacy.copy", {"dest": "/tmp/x.cnf"}, task_vars=task_vars
    )

    call = base._shared_loader_obj.action_loader.get.call_args
    assert call.kwargs["task"].args == {"dest": "/tmp/x.cnf"}
    assert call.kwargs["connection"] is base._connection
    assert copy_action.calls == [task_vars]
    assert result["changed"] is True


def test_copy_content_drops_none_and_invocation(base) -> None:
    """Test unset file options are not forwarded to copy."""
    result = base._copy_content(
        "[mysqld]\n",
        "/etc/mysql/conf.d/a.cnf",
        file_args={"owner": None, "mode": "0640", "backup": False},
    )

    call = base._shared_loader_obj.action_loader.get.call_args
    assert call.kwargs["task"].args == {
        "content": "[mysqld]\n",
        "dest": "/etc/mysql/conf.d/a.cnf",
        "follow": True,
        "mode": "0640",
        "backup": False,
    }
    assert "invocation" not in result


@pytest.mark.parametrize(
    "task_vars,expected",
    [
        ({}, "/etc/mysql/conf.d"),
        ({"ansible_facts": {}}, "/etc/mysql/conf.d"),
        ({"ansible_facts": {"os_family": "RedHat"}}, "/etc/my.cnf.d"),
        ({"ansible_os_family": "Suse"}, "/etc/my.cnf.d"),
        (None, "/etc/mysql/conf.d"),
    ],
)
def test_layout(base, task_vars, expected) -> None:
    """Test layout selection from facts and injected variables."""
    assert base._layout(task_vars)["config_dir"] == expected
