"""Remediation hints for exposed findings."""

from __future__ import annotations

from typing import Dict, Optional

_ISOLATE_PERSONAL = (
    "Run sandbox in separate user account or VM without access to personal data stores."
)

REMEDIATION: Dict[str, str] = {
    # credentials
    "ssh_keys": (
        "Move SSH keys outside sandbox or use hardware key (YubiKey). "
        "Consider ssh-agent forwarding with confirmation."
    ),
    "cloud_creds": "Use IAM roles, instance profiles, or credential helpers instead of static credentials.",
    "keychain_items": "Configure sandbox to block login keychain access. Use ephemeral credentials.",
    "git_credentials": "Use credential helpers with short-lived tokens. Clear .git-credentials after sessions.",
    "env_secrets": "Use secret manager or credential helper instead of env vars.",
    "kube_config": "Use short-lived tokens via kubectl auth. Avoid persistent kubeconfig with long-lived certs.",
    "docker_config": "Use credential helpers instead of storing auth tokens in config.json.",
    "gpg_keys": "Move private keys outside sandbox. Consider hardware tokens for signing.",
    "npm_token": "Use short-lived tokens or package registry proxies. Avoid global npmrc/pypirc.",
    "pypi_token": "Use short-lived tokens or package registry proxies. Avoid global npmrc/pypirc.",
    "ci_secrets": "Minimize token scopes. Use OIDC federation instead of long-lived tokens.",
    "ci_oidc": "Ensure cloud role trust policies for OIDC tokens are scoped correctly.",
    "ssh_agent": "Use ssh-agent with confirmation prompts. Consider per-session agent isolation.",
    "k8s_service_account": "Bind to minimal RBAC role. Consider disabling automount in pod spec.",
    # personal data
    "shell_history": "Clear history or set HISTFILE to /dev/null in sandbox. Avoid secrets in commands.",
    "browser_history": "Use dedicated browser profile for sandboxed sessions. Clear data on exit.",
    "browser_data": "Use dedicated browser profile for sandboxed sessions. Clear data on exit.",
    "clipboard": "Clear clipboard after sensitive operations. Use clipboard managers with timeout.",
    "contacts": _ISOLATE_PERSONAL,
    "calendar": _ISOLATE_PERSONAL,
    "notes": _ISOLATE_PERSONAL,
    "messages": _ISOLATE_PERSONAL,
    "mail": _ISOLATE_PERSONAL,
    # system visibility
    "processes": "Run in container with PID namespace isolation. Use hidepid mount option.",
    "hostname": "Use container UTS namespace isolation. Set randomized hostname in sandbox.",
    "network_topology": "Use network namespace isolation. Limit visibility with network policy.",
    "network_interfaces": "Use network namespace isolation. Limit visibility with network policy.",
    "installed_apps": "Run in minimal container without host application list access.",
    # persistence
    "shell_rc_write": "Make RC files read-only in sandbox. Use immutable containers.",
    "launchagents_write": "Block write access to LaunchAgents directories. Use ephemeral sandboxes.",
    "cron_write": "Deny crontab access to the sandbox user. Use ephemeral sandboxes.",
    "tmp_write": "Use tmpfs with noexec if persistence is a concern.",
    # network
    "outbound_http": "Configure network policy to block outbound except allowlist.",
    "egress_connectivity": "Configure network policy to block outbound except allowlist.",
    "egress_destinations": "Block paste sites, webhooks, and file upload services at firewall/proxy.",
    "egress_dns": "Force DNS through controlled resolver. Block DoH endpoints.",
    "dns_resolution": "Use network namespace with controlled DNS. Consider DNS filtering.",
    "cloud_metadata": "Block 169.254.169.254 at network level. Use IMDSv2 with hop limit.",
    "local_services": "Isolate sandbox network. Use localhost proxy for required services only.",
    # intelligence
    "file_databases": "Run in separate user account without access to application databases.",
    "services_launchd": "Use container runtime isolation. Minimize visible services.",
}


def remediation_for(test_name: str) -> Optional[str]:
    """Return the hint for *test_name*, or None when there is none."""
    return REMEDIATION.get(test_name)
