"""Tests for the database, API, frontend and add-on compatibility rules."""

from __future__ import annotations

from stackwright.core.compatibility import DEFAULT_RULES, ChangeRecord, resolve_stack


class TestRuleTable:
    """Structural checks on the default rule table."""

    def test_names_unique(self) -> None:
        names = [rule.name for rule in DEFAULT_RULES]
        assert len(names) == len(set(names))

    def test_backend_rules_run_first(self) -> None:
        ordered = sorted(DEFAULT_RULES, key=lambda r: r.priority)
        assert [r.name for r in ordered[:2]] == ["convex", "none"]


class TestDatabaseRules:
    """Rules triggered by the database selection."""

    def test_no_database_disables_orm_and_auth(self, base_stack) -> None:
        base_stack.update(database="none", dbSetup="turso")
        result = resolve_stack(base_stack)
        adjusted = result.adjusted_stack
        assert adjusted["orm"] == "none"
        assert adjusted["auth"] == "false"
        assert adjusted["dbSetup"] == "none"
        assert all(c.category == "database-none" for c in result.changes)
        assert result.notes["database"].has_issue

    def test_mongodb_requires_prisma_or_mongoose(self, base_stack) -> None:
        base_stack["database"] = "mongodb"
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["orm"] == "prisma"
        assert result.changes == [ChangeRecord("mongodb-orm", "ORM set to 'prisma'")]

    def test_mongodb_with_mongoose_is_fine(self, base_stack) -> None:
        base_stack.update(database="mongodb", orm="mongoose")
        assert resolve_stack(base_stack).adjusted_stack is None

    def test_mongoose_without_mongodb(self, base_stack) -> None:
        base_stack.update(database="postgres", orm="mongoose")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["orm"] == "drizzle"


class TestRuntimeRule:
    """Runtime 'none' is reserved for serverless backends."""

    def test_runtime_none_resets_to_bun(self, base_stack) -> None:
        base_stack.update(backend="express", runtime="none")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["runtime"] == "bun"
        assert result.changes == [ChangeRecord("runtime-none", "Runtime set to 'bun'")]
        assert result.notes["runtime"].has_issue
        assert len(result.notes["runtime"].notes) == 1

    def test_runtime_none_kept_without_backend(self, base_stack) -> None:
        base_stack["backend"] = "none"
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["runtime"] == "none"
        assert "runtime-none" not in {c.category for c in result.changes}


class TestHostedProviderRules:
    """Hosted database setups pin the database and ORM they provision."""

    def test_turso_requires_sqlite_and_drizzle(self, base_stack) -> None:
        base_stack.update(dbSetup="turso", database="postgres", orm="prisma")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["database"] == "sqlite"
        assert result.adjusted_stack["orm"] == "drizzle"
        assert {c.category for c in result.changes} == {"turso-setup"}
        assert result.notes["dbSetup"].has_issue
        assert result.notes["database"].has_issue

    def test_turso_on_default_stack_is_fine(self, base_stack) -> None:
        base_stack["dbSetup"] = "turso"
        assert resolve_stack(base_stack).adjusted_stack is None

    def test_prisma_postgres_requires_postgres(self, base_stack) -> None:
        base_stack.update(dbSetup="prisma-postgres", orm="prisma")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["database"] == "postgres"
        assert result.changes == [
            ChangeRecord("prisma-postgres-setup", "Database set to 'postgres'")
        ]

    def test_mongodb_atlas_requires_mongodb_and_prisma(self, base_stack) -> None:
        base_stack["dbSetup"] = "mongodb-atlas"
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["database"] == "mongodb"
        assert result.adjusted_stack["orm"] == "prisma"
        assert [c.category for c in result.changes] == [
            "mongodb-atlas-setup", "mongodb-orm",
        ]

    def test_mongodb_atlas_keeps_mongoose(self, base_stack) -> None:
        base_stack.update(dbSetup="mongodb-atlas", orm="mongoose")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["orm"] == "mongoose"

    def test_neon_and_supabase_require_postgres(self, base_stack) -> None:
        for setup in ("neon", "supabase"):
            stack = dict(base_stack, dbSetup=setup)
            result = resolve_stack(stack)
            assert result.adjusted_stack["database"] == "postgres"
            assert result.changes[0].category == "postgres-setup"

    def test_provider_then_mongoose_cleanup(self, base_stack) -> None:
        base_stack.update(dbSetup="neon", database="mongodb", orm="mongoose")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["database"] == "postgres"
        assert result.adjusted_stack["orm"] == "drizzle"

    def test_no_database_wins_over_provider(self, base_stack) -> None:
        base_stack.update(database="none", dbSetup="neon")
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["database"] == "none"
        assert result.adjusted_stack["dbSetup"] == "none"


class TestApiAndFrontendRules:
    """Rules tying the API layer to frontends and examples."""

    def test_api_none_clears_examples(self, base_stack) -> None:
        base_stack.update(api="none", examples=["todo"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == []

    def test_api_none_without_examples_is_fine(self, base_stack) -> None:
        base_stack["api"] = "none"
        assert resolve_stack(base_stack).adjusted_stack is None

    def test_todo_removed_without_database(self, base_stack) -> None:
        base_stack.update(database="none", orm="none", auth="false", examples=["todo", "ai"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == ["ai"]
        assert result.changes == [
            ChangeRecord("todo-requires-database", "Todo example removed (requires a database)")
        ]
        assert result.notes["database"].has_issue
        assert result.notes["examples"].has_issue

    def test_convex_keeps_todo(self, base_stack) -> None:
        base_stack.update(backend="convex", examples=["todo"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == ["todo"]

    def test_ai_removed_for_elysia(self, base_stack) -> None:
        base_stack.update(backend="elysia", examples=["todo", "ai"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == ["todo"]
        assert result.notes["backend"].has_issue

    def test_ai_removed_for_solid_once(self, base_stack) -> None:
        base_stack.update(
            backend="elysia", webFrontend=["solid"], api="orpc", examples=["ai"]
        )
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == []
        assert [c.category for c in result.changes] == ["ai-elysia"]

    def test_ai_removed_for_solid(self, base_stack) -> None:
        base_stack.update(webFrontend=["solid"], api="orpc", examples=["ai"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["examples"] == []
        assert result.notes["webFrontend"].has_issue

    def test_nuxt_switches_trpc_to_orpc(self, base_stack) -> None:
        base_stack["webFrontend"] = ["nuxt"]
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["api"] == "orpc"
        assert result.notes["api"].has_issue
        assert result.notes["webFrontend"].has_issue

    def test_convex_takes_precedence_over_orpc(self, base_stack) -> None:
        base_stack.update(backend="convex", webFrontend=["svelte"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["api"] == "none"
        assert "frontend-requires-orpc" not in {c.category for c in result.changes}


class TestAddonRules:
    """Rules removing add-ons that the chosen frontends cannot host."""

    def test_pwa_removed_without_compatible_frontend(self, base_stack) -> None:
        base_stack.update(webFrontend=["svelte"], api="orpc", addons=["pwa", "turborepo"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["addons"] == ["turborepo"]
        assert result.notes["addons"].has_issue

    def test_pwa_kept_with_compatible_frontend(self, base_stack) -> None:
        base_stack["addons"] = ["pwa"]
        assert resolve_stack(base_stack).adjusted_stack is None

    def test_tauri_removed_without_compatible_frontend(self, base_stack) -> None:
        base_stack.update(webFrontend=["none"], addons=["tauri", "biome"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["addons"] == ["biome"]

    def test_convex_removal_can_drop_pwa(self, base_stack) -> None:
        base_stack.update(backend="convex", webFrontend=["solid"], addons=["pwa"])
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["webFrontend"] == []
        assert result.adjusted_stack["addons"] == []

    def test_ultracite_replaces_biome(self, base_stack) -> None:
        base_stack["addons"] = ["ultracite", "biome", "husky"]
        result = resolve_stack(base_stack)
        assert result.adjusted_stack["addons"] == ["ultracite", "husky"]
        assert result.changes == [
            ChangeRecord("ultracite-biome", "Biome addon removed (included in Ultracite)")
        ]
        assert len(result.notes["addons"].notes) == 1
