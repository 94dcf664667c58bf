"""Directory client that queries Microsoft Teams through PowerShell."""
from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import Dict, List, Mapping, Optional, Sequence

from .base import DirectoryQueryError, RawItem, coerce_items

LOGGER = logging.getLogger(__name__)

DEFAULT_QUERIES: Mapping[str, str] = {
    "users": "Get-CsOnlineUser -ResultSize Unlimited | Where-Object { $_.LineURI }",
    "meeting_rooms": "Get-CsMeetingRoom | Where-Object { $_.LineURI }",
    "resource_accounts": "Get-CsOnlineApplicationInstance | Where-Object { $_.PhoneNumber }",
}

CATEGORY_FIELDS: Mapping[str, Sequence[str]] = {
    "users": ("UserPrincipalName", "LineURI", "DisplayName", "FirstName", "LastName"),
    "meeting_rooms": ("UserPrincipalName", "LineURI", "DisplayName"),
    "resource_accounts": ("UserPrincipalName", "DisplayName", "PhoneNumber", "ApplicationId"),
}


class PowerShellDirectoryClient:
    """Run one bulk query per category in ``pwsh`` and decode the JSON output.

    ``connect_command`` is prepended to every script so that each PowerShell
    process starts with an authenticated session, for example
    ``Connect-MicrosoftTeams -CertificateThumbprint ... -ApplicationId ...``.
    """

    name = "powershell"

    def __init__(
        self,
        *,
        executable: str = "pwsh",
        connect_command: Optional[str] = None,
        queries: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.executable = executable
        self.connect_command = connect_command
        self.queries: Dict[str, str] = dict(DEFAULT_QUERIES)
        self.queries.update(queries or {})
        self.timeout = timeout

    def get_users(self) -> List[RawItem]:
        return self._run_query("users")

    def get_meeting_rooms(self) -> List[RawItem]:
        return self._run_query("meeting_rooms")

    def get_resource_accounts(self) -> List[RawItem]:
        return self._run_query("resource_accounts")

    def build_script(self, category: str) -> str:
        fields = ",".join(CATEGORY_FIELDS[category])
        script = f"{self.queries[category]} | Select-Object {fields} | ConvertTo-Json -Depth 3 -Compress"
        if self.connect_command:
            script = f"{self.connect_command} | Out-Null; {script}"
        return script

    def _run_query(self, category: str) -> List[RawItem]:
        executable = shutil.which(self.executable) or self.executable
        command = [executable, "-NoProfile", "-NonInteractive", "-Command", self.build_script(category)]
        LOGGER.debug("Querying %s via %s", category, self.executable)
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise DirectoryQueryError(f"Could not run {self.executable} for {category}: {exc}") from exc

        if completed.returncode != 0:
            message = (completed.stderr or "").strip() or f"exit status {completed.returncode}"
            raise DirectoryQueryError(f"{category} query failed: {message}")

        output = (completed.stdout or "").strip()
        if not output:
            return []
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as exc:
            raise DirectoryQueryError(f"{category} query returned invalid JSON: {exc}") from exc
        return coerce_items(payload, f"{category} query")


__all__ = ["CATEGORY_FIELDS", "DEFAULT_QUERIES", "PowerShellDirectoryClient"]
