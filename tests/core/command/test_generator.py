"""Tests for scaffolder command generation from stack configurations."""

from __future__ import annotations

from stackwright.core.command import generate_command
from stackwright.core.compatibility import resolve_stack


class TestBaseCommand:
    """Package manager selection and project name."""

    def test_default_stack_has_no_flags(self, base_stack) -> None:
        assert generate_command(base_stack) == "bun create xaheen@latest my-xaheen-app --yes"

    def test_npm_base(self, base_stack) -> None:
        base_stack["packageManager"] = "npm"
        command = generate_command(base_stack)
        assert command.startswith("npx xaheen@latest my-xaheen-app --yes")
        assert "--package-manager npm" in command

    def test_pnpm_base(self, base_stack) -> None:
        base_stack["packageManager"] = "pnpm"
        assert generate_command(base_stack).startswith("pnpm create xaheen@latest")

    def test_project_name(self, base_stack) -> None:
        base_stack["projectName"] = "shop"
        assert generate_command(base_stack).startswith("bun create xaheen@latest shop ")

    def test_empty_project_name_falls_back(self, base_stack) -> None:
        base_stack["projectName"] = ""
        assert " my-xaheen-app " in generate_command(base_stack)


class TestFlags:
    """Non-default categories become flags."""

    def test_frontend_combines_web_and_native(self, base_stack) -> None:
        base_stack.update(webFrontend=["next"], nativeFrontend=["native-nativewind"])
        assert "--frontend next native-nativewind" in generate_command(base_stack)

    def test_frontend_drops_none_when_others_present(self, base_stack) -> None:
        base_stack["webFrontend"] = ["next"]
        assert "--frontend next " in generate_command(base_stack) + " "

    def test_frontend_none(self, base_stack) -> None:
        base_stack.update(webFrontend=[], nativeFrontend=["none"])
        assert "--frontend none" in generate_command(base_stack)

    def test_server_flags(self, base_stack) -> None:
        base_stack.update(
            backend="express", runtime="node", api="orpc",
            database="postgres", orm="prisma", dbSetup="neon",
        )
        command = generate_command(base_stack)
        assert "--backend express" in command
        assert "--runtime node" in command
        assert "--api orpc" in command
        assert "--database postgres" in command
        assert "--orm prisma" in command
        assert "--db-setup neon" in command

    def test_hosted_setup_forces_database_flag(self, base_stack) -> None:
        base_stack["dbSetup"] = "turso"
        command = generate_command(base_stack)
        assert "--database sqlite" in command
        assert "--db-setup turso" in command

    def test_negated_toggles(self, base_stack) -> None:
        base_stack.update(auth="false", git="false", install="false")
        command = generate_command(base_stack)
        assert "--no-auth" in command
        assert "--no-git" in command
        assert "--no-install" in command

    def test_web_deploy(self, base_stack) -> None:
        base_stack["webDeploy"] = "workers"
        assert "--web-deploy workers" in generate_command(base_stack)

    def test_addons_filtered_to_known(self, base_stack) -> None:
        base_stack["addons"] = ["pwa", "mystery", "biome"]
        assert "--addons pwa biome" in generate_command(base_stack)

    def test_addons_emptied(self, base_stack) -> None:
        base_stack["addons"] = []
        assert generate_command(base_stack).endswith("--addons none")

    def test_examples(self, base_stack) -> None:
        base_stack["examples"] = ["todo", "ai"]
        assert generate_command(base_stack).endswith("--examples todo ai")


class TestConvexCommand:
    """Convex stacks omit the server-side flags Convex forces."""

    def test_resolved_convex_stack(self, base_stack) -> None:
        base_stack["backend"] = "convex"
        stack = resolve_stack(base_stack).adjusted_stack
        command = generate_command(stack)
        assert command == "bun create xaheen@latest my-xaheen-app --yes --backend convex"

    def test_convex_skips_server_flags(self, base_stack) -> None:
        base_stack.update(backend="convex", orm="prisma", runtime="node")
        command = generate_command(base_stack)
        assert "--orm" not in command
        assert "--runtime" not in command
