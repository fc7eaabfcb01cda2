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

from typing import Any, Dict, Optional

from ansible_collections.o0_o.mysql.plugins.action_utils import (
    MysqlBase,
    ResourceGraph,
    render_config,
)
from ansible_collections.o0_o.mysql.plugins.action_utils.server_config import (
    RESTART_ACTION,
)


class ActionModule(MysqlBase):
    """
    Render a MySQL option file into the server's include directory.

    The settings mapping is rendered on the controller into
    ``<config_dir>/<title>.cnf`` and handed to the copy action, which
    owns the actual write, backup and validation. The task result
    reports the relationships the file declares: it always requires
    the base option file and, unless ``notify_service`` is false, it
    notifies the restart action.

    .. note::
       Relationships are reported, not acted on. Wire the restart
       through a handler that checks ``restart_required``.
    """

    TRANSFERS_FILES = False
    _requires_connection = True
    _supports_check_mode = True
    _supports_async = False
    _supports_diff = True

    def _def_args(self) -> Dict[str, Any]:
        """
        Define and parse module arguments.

        :returns Dict[str, Any]: The validated argument dictionary
        :raises AnsibleActionFail: When argument validation fails
        """
        self._display.vvv("Defining argument spec")
        argument_spec = {
            "title": {"type": "str", "required": True},
            "settings": {"type": "dict", "required": True},
            "notify_service": {"type": "bool", "default": True},
            "config_dir": {"type": "path"},
            "config_file": {"type": "path"},
            "restart_action": {"type": "str", "default": RESTART_ACTION},
            "owner": {"type": "str"},
            "group": {"type": "str"},
            "mode": {"type": "raw"},
            "backup": {"type": "bool", "default": False},
            "validate": {"type": "str"},
        }

        validation_result, new_module_args = self.validate_argument_spec(
            argument_spec=argument_spec,
        )

        return new_module_args

    def run(
        self,
        tmp: Optional[str] = None,
        task_vars: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Main entry point for the server_config action plugin.

        :param Optional[str] tmp: Temporary directory path (unused in
            modern Ansible)
        :param Optional[Dict[str, Any]] task_vars: Task variables
            dictionary, used for the ``os_family`` fact
        :returns Dict[str, Any]: Standard Ansible result dictionary

        :raises ValidationError: When the settings are malformed
        :raises PathError: When the title gives an unsafe path
        """
        self._display.vvv("Starting server_config run()")
        task_vars = task_vars or {}

        new_module_args = self._def_args()

        result = super().run(tmp, task_vars)
        result.update({"changed": False, "msg": ""})

        del tmp

        layout = self._layout(task_vars)
        config_dir = new_module_args.get("config_dir") or layout["config_dir"]
        config_file = new_module_args.get("config_file") or layout["config_file"]

        graph = ResourceGraph()
        rendered = render_config(
            new_module_args["title"],
            new_module_args["settings"],
            notify_service=new_module_args["notify_service"],
            config_dir=config_dir,
            config_file=config_file,
            restart_action=new_module_args["restart_action"],
            graph=graph,
        )

        self._display.vvv(f"Writing rendered settings to {rendered.path}")
        file_args = {
            key: new_module_args.get(key)
            for key in ("owner", "group", "mode", "backup", "validate")
        }
        copy_result = self._copy_content(
            rendered.content,
            rendered.path,
            file_args=file_args,
            task_vars=task_vars,
        )
        result.update(copy_result)
        result["path"] = rendered.path

        if result.get("failed"):
            return result

        changed = [rendered.resource] if result.get("changed") else []
        result["require"] = str(rendered.require)
        if rendered.notify is not None:
            result["notify"] = str(rendered.notify)
        result["relationships"] = [rel.to_dict() for rel in graph.relationships()]
        result["restart_required"] = bool(graph.notifications(changed))

        return result
