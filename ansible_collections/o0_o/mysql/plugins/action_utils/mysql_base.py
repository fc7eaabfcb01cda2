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
Shared helpers for the MySQL action plugins.

Action plugins in this collection render content on the controller and
leave the actual file handling to other action plugins, invoked by
their fully qualified collection names (FQCNs).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ansible.errors import AnsibleActionFail
from ansible.plugins.action import ActionBase
from ansible_collections.o0_o.mysql.plugins.action_utils.server_config import (
    layout_for,
)


class MysqlBase(ActionBase):
    """
    Base class for MySQL configuration action plugins.

    Provides delegation to other action plugins and the lookup of the
    platform's option file layout from gathered facts.

    Usage:
        class ActionModule(MysqlBase):
            def run(self, tmp=None, task_vars=None):
                ...
    """

    COPY_ACTION = "ansible.legacy.copy"

    def run(
        self,
        tmp: Optional[str] = None,
        task_vars: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Base run method that initializes the result structure.

        :param Optional[str] tmp: Temporary path (unused in modern
            Ansible)
        :param Optional[Dict[str, Any]] task_vars: Task variables
            dictionary
        :returns Dict[str, Any]: Initial result dictionary
        """
        return super().run(tmp, task_vars)

    def _run_action(
        self,
        plugin_name: str,
        plugin_args: Dict[str, Any],
        task_vars: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Execute another action plugin using the provided arguments.

        :param str plugin_name: Fully qualified name of the plugin to
            run (e.g. 'ansible.legacy.copy')
        :param dict plugin_args: Dictionary of arguments to pass to the
            plugin
        :param Optional[dict] task_vars: Dictionary of task variables
            from the calling task
        :returns dict: The result dictionary returned by the plugin's
            run method
        """
        current_fqcn = self._task.action.lower().strip()
        requested_fqcn = plugin_name.lower().strip()

        if requested_fqcn == current_fqcn:
            raise AnsibleActionFail(
                f"Action '{plugin_name}' attempted to call itself. This "
                "would result in infinite recursion."
            )

        task = self._task.copy()
        task.args = dict(plugin_args)

        plugin = self._shared_loader_obj.action_loader.get(
            plugin_name,
            task=task,
            connection=self._connection,
            play_context=self._play_context,
            loader=self._loader,
            templar=self._templar,
            shared_loader_obj=self._shared_loader_obj,
        )

        self._display.vvv(f"Delegating to {plugin_name}")
        return plugin.run(task_vars=task_vars)

    def _sanitize_args(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of the argument dictionary with all None values
        removed.

        :param dict args: Dictionary of module arguments to sanitize
        :returns dict: A new dictionary with all None values removed
        """
        return {k: v for k, v in args.items() if v is not None}

    def _layout(self, task_vars: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
        """
        Pick the option file layout for the target host.

        Looks for ``os_family`` in ``ansible_facts`` first, then the
        injected ``ansible_os_family`` variable. Hosts without facts get
        the Debian layout.

        :param Optional[dict] task_vars: Task variables from run()
        :returns dict: ``config_dir`` and ``config_file`` paths
        """
        task_vars = task_vars or {}
        facts = task_vars.get("ansible_facts") or {}
        os_family = facts.get("os_family") or task_vars.get("ansible_os_family")
        self._display.vvv(f"Option file layout for os_family={os_family}")
        return layout_for(os_family)

    def _copy_content(
        self,
        content: str,
        dest: str,
        file_args: Optional[Dict[str, Any]] = None,
        task_vars: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Hand rendered content to the copy action for writing.

        :param str content: Full file content
        :param str dest: Absolute path on the remote host
        :param Optional[dict] file_args: Ownership, mode, backup and
            validate options; None values are dropped
        :param Optional[dict] task_vars: Task variables from run()
        :returns dict: The copy result without its ``invocation``
        """
        copy_args = {"content": content, "dest": dest, "follow": True}
        copy_args.update(self._sanitize_args(file_args or {}))

        copy_result = self._run_action(
            self.COPY_ACTION, copy_args, task_vars=task_vars
        )
        copy_result.pop("invocation", None)
        return copy_result
