"""Rebuild the scaffolder command line that reproduces a stack configuration.

Only values that differ from the defaults become flags, so the generated
command is the shortest invocation that yields the same stack. Flags for
categories a Convex backend forces are omitted for Convex stacks.
"""

from __future__ import annotations

from typing import Any, Mapping

from stackwright.stack import DEFAULT_PROJECT_NAME, DEFAULT_STACK, is_stack_default

_BASE_COMMANDS: dict[str, str] = {
    "npm": "npx xaheen@latest",
    "pnpm": "pnpm create xaheen@latest",
}
_FALLBACK_BASE = "bun create xaheen@latest"

# Hosted database providers that need the database passed explicitly.
EXPLICIT_DATABASE_SETUPS = frozenset({
    "d1", "turso", "neon", "supabase", "prisma-postgres", "mongodb-atlas", "docker",
})

KNOWN_ADDONS: tuple[str, ...] = (
    "pwa", "tauri", "starlight", "biome", "husky",
    "turborepo", "ultracite", "fumadocs", "oxlint",
)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _negated_flag(stack: Mapping[str, Any], key: str, flag: str) -> str | None:
    """Return *flag* when a ``"true"``-by-default toggle was switched off."""
    value = stack.get(key)
    if is_stack_default(stack, key, value):
        return None
    if value == "false" and DEFAULT_STACK[key] == "true":
        return flag
    return None


def _frontend_flag(stack: Mapping[str, Any]) -> str | None:
    web = _as_list(stack.get("webFrontend"))
    native = _as_list(stack.get("nativeFrontend"))
    if is_stack_default(stack, "webFrontend", web) and is_stack_default(
        stack, "nativeFrontend", native
    ):
        return None

    combined = web + native
    frontends = [f for f in combined if f != "none" or len(combined) == 1]
    if not frontends or frontends[0] == "none":
        return "--frontend none"
    return f"--frontend {' '.join(frontends)}"


def _server_flags(stack: Mapping[str, Any]) -> list[str]:
    """Flags for runtime, API, database, ORM, auth and DB setup."""
    flags: list[str] = []

    def changed(key: str) -> bool:
        return not is_stack_default(stack, key, stack.get(key))

    if changed("runtime"):
        flags.append(f"--runtime {stack.get('runtime')}")
    if changed("api"):
        flags.append(f"--api {stack.get('api')}")
    if changed("database") or stack.get("dbSetup") in EXPLICIT_DATABASE_SETUPS:
        flags.append(f"--database {stack.get('database')}")
    if changed("orm"):
        flags.append(f"--orm {stack.get('orm')}")

    no_auth = _negated_flag(stack, "auth", "--no-auth")
    if no_auth:
        flags.append(no_auth)

    if changed("dbSetup"):
        flags.append(f"--db-setup {stack.get('dbSetup')}")
    return flags


def _list_flag(
    stack: Mapping[str, Any],
    key: str,
    flag: str,
    allowed: tuple[str, ...] | None = None,
) -> str | None:
    """Flag for a multi-select category, ``none`` when it was emptied."""
    values = _as_list(stack.get(key))
    if is_stack_default(stack, key, values):
        return None

    if allowed is not None:
        values = [v for v in values if v in allowed]
    if values:
        return f"{flag} {' '.join(values)}"
    if DEFAULT_STACK[key]:
        return f"{flag} none"
    return None


def generate_command(stack: Mapping[str, Any]) -> str:
    """Return the scaffolder invocation that recreates *stack*.

    Args:
        stack: A stack configuration; missing keys are treated as unset.

    Returns:
        A single command-line string, e.g.
        ``"bun create xaheen@latest my-app --yes --backend convex"``.
    """
    base = _BASE_COMMANDS.get(stack.get("packageManager", ""), _FALLBACK_BASE)
    project_name = stack.get("projectName") or DEFAULT_PROJECT_NAME
    flags: list[str] = ["--yes"]

    frontend = _frontend_flag(stack)
    if frontend:
        flags.append(frontend)

    if not is_stack_default(stack, "backend", stack.get("backend")):
        flags.append(f"--backend {stack.get('backend')}")

    if stack.get("backend") != "convex":
        flags.extend(_server_flags(stack))

    if not is_stack_default(stack, "packageManager", stack.get("packageManager")):
        flags.append(f"--package-manager {stack.get('packageManager')}")

    no_git = _negated_flag(stack, "git", "--no-git")
    if no_git:
        flags.append(no_git)

    web_deploy = stack.get("webDeploy")
    if web_deploy and not is_stack_default(stack, "webDeploy", web_deploy):
        flags.append(f"--web-deploy {web_deploy}")

    no_install = _negated_flag(stack, "install", "--no-install")
    if no_install:
        flags.append(no_install)

    addons = _list_flag(stack, "addons", "--addons", allowed=KNOWN_ADDONS)
    if addons:
        flags.append(addons)

    examples = _list_flag(stack, "examples", "--examples")
    if examples:
        flags.append(examples)

    return f"{base} {project_name} {' '.join(flags)}"
