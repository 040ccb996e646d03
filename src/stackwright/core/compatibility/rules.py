"""The default compatibility rule table.

Rules run in priority order, each seeing the stack as adjusted by the rules
before it. The table must stay a one-pass fixed point: no override or filter
may make an earlier rule's trigger true, or re-enable a later rule that has
already been satisfied. Backend and runtime rules come first, then
database and hosted-provider rules, API and example rules, frontend and
finally add-on rules, and each group only writes categories that later
groups read.
"""

from __future__ import annotations

from typing import Any, Mapping

from stackwright.core.compatibility.models import CategoryFilter, CompatibilityRule


def _selected(stack: Mapping[str, Any], category: str) -> list[str]:
    """Return the members of a multi-select category as a list."""
    value = stack.get(category)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _has_any(stack: Mapping[str, Any], category: str, options: frozenset[str]) -> bool:
    return any(member in options for member in _selected(stack, category))


# Frontends that work with each add-on.
PWA_FRONTENDS = frozenset({"tanstack-router", "react-router", "solid", "next"})
TAURI_FRONTENDS = frozenset({
    "tanstack-router", "react-router", "nuxt", "svelte", "solid", "next",
})
CONVEX_INCOMPATIBLE_FRONTENDS = frozenset({"nuxt", "solid"})
ORPC_FRONTENDS = frozenset({"nuxt", "svelte", "solid"})

HOSTED_POSTGRES_SETUPS = frozenset({"neon", "supabase"})


# ---------------------------------------------------------------------------
# Backend rules
# ---------------------------------------------------------------------------

CONVEX_BACKEND = CompatibilityRule(
    name="convex",
    source="backend",
    priority=10,
    trigger=lambda s: s.get("backend") == "convex",
    overrides={
        "runtime": "none",
        "database": "none",
        "orm": "none",
        "api": "none",
        "auth": "false",
        "dbSetup": "none",
        "examples": ["todo"],
    },
    filters=(
        CategoryFilter(
            category="webFrontend",
            disallowed=CONVEX_INCOMPATIBLE_FRONTENDS,
            target_note=(
                "Nuxt and Solid are not compatible with Convex backend "
                "and have been removed."
            ),
            source_note="Convex backend is not compatible with Nuxt or Solid.",
            message="Removed incompatible web frontends (Nuxt, Solid)",
        ),
    ),
    target_note="Convex backend selected: {category} will be set to '{value}'.",
    source_note="Convex requires {category} to be '{value}'.",
)

NO_BACKEND = CompatibilityRule(
    name="none",
    source="backend",
    priority=20,
    trigger=lambda s: s.get("backend") == "none",
    overrides={
        "auth": "false",
        "database": "none",
        "orm": "none",
        "api": "none",
        "runtime": "none",
        "dbSetup": "none",
        "examples": [],
    },
    target_note="No backend selected: {category} will be set to '{value}'.",
    source_note="No backend requires {category} to be '{value}'.",
)

RUNTIME_NONE_REQUIRES_BACKEND = CompatibilityRule(
    name="runtime-none",
    source="runtime",
    priority=25,
    trigger=lambda s: (
        s.get("runtime") == "none"
        and s.get("backend") not in ("convex", "none")
    ),
    overrides={"runtime": "bun"},
    target_note="Runtime 'none' is only for Convex. {category} will be set to '{value}'.",
)


# ---------------------------------------------------------------------------
# Database rules
# ---------------------------------------------------------------------------

NO_DATABASE = CompatibilityRule(
    name="database-none",
    source="database",
    priority=30,
    trigger=lambda s: s.get("database") == "none",
    overrides={"orm": "none", "auth": "false", "dbSetup": "none"},
    target_note="No database selected: {category} will be set to '{value}'.",
    source_note="No database requires {category} to be '{value}'.",
)

# Hosted database providers pin the database (and sometimes the ORM) they
# provision. They run after NO_DATABASE, which clears dbSetup when there is
# no database, and before the MongoDB ORM rules, which settle the ORM.

TURSO_SETUP = CompatibilityRule(
    name="turso-setup",
    source="dbSetup",
    priority=32,
    trigger=lambda s: (
        s.get("dbSetup") == "turso"
        and (s.get("database") != "sqlite" or s.get("orm") != "drizzle")
    ),
    overrides={"database": "sqlite", "orm": "drizzle"},
    target_note="Turso DB setup requires {category} to be '{value}'. It will be selected.",
    source_note="Turso requires {category} to be '{value}'.",
)

PRISMA_POSTGRES_SETUP = CompatibilityRule(
    name="prisma-postgres-setup",
    source="dbSetup",
    priority=34,
    trigger=lambda s: (
        s.get("dbSetup") == "prisma-postgres" and s.get("database") != "postgres"
    ),
    overrides={"database": "postgres"},
    target_note="Prisma PostgreSQL setup requires {category} to be '{value}'. It will be selected.",
    source_note="Prisma PostgreSQL requires {category} to be '{value}'.",
)

MONGODB_ATLAS_SETUP = CompatibilityRule(
    name="mongodb-atlas-setup",
    source="dbSetup",
    priority=36,
    trigger=lambda s: (
        s.get("dbSetup") == "mongodb-atlas" and s.get("database") != "mongodb"
    ),
    overrides={"database": "mongodb"},
    target_note="MongoDB Atlas setup requires {category} to be '{value}'. It will be selected.",
    source_note="MongoDB Atlas requires {category} to be '{value}'.",
)

HOSTED_POSTGRES_SETUP = CompatibilityRule(
    name="postgres-setup",
    source="dbSetup",
    priority=38,
    trigger=lambda s: (
        s.get("dbSetup") in HOSTED_POSTGRES_SETUPS and s.get("database") != "postgres"
    ),
    overrides={"database": "postgres"},
    target_note="Neon and Supabase setups require {category} to be '{value}'. It will be selected.",
    source_note="Neon and Supabase require {category} to be '{value}'.",
)

MONGODB_ORM = CompatibilityRule(
    name="mongodb-orm",
    source="database",
    priority=40,
    trigger=lambda s: (
        s.get("database") == "mongodb"
        and s.get("orm") not in ("prisma", "mongoose")
    ),
    overrides={"orm": "prisma"},
    target_note="MongoDB selected: {category} will be set to '{value}'.",
    source_note="MongoDB requires {category} to be Prisma or Mongoose.",
)

MONGOOSE_REQUIRES_MONGODB = CompatibilityRule(
    name="mongoose-requires-mongodb",
    source="database",
    priority=50,
    trigger=lambda s: s.get("orm") == "mongoose" and s.get("database") != "mongodb",
    overrides={"orm": "drizzle"},
    target_note="Mongoose only works with MongoDB: {category} will be set to '{value}'.",
    source_note="Non-MongoDB databases require {category} to be '{value}' instead of Mongoose.",
)


# ---------------------------------------------------------------------------
# API, example and frontend rules
# ---------------------------------------------------------------------------

API_NONE_EXAMPLES = CompatibilityRule(
    name="api-none-examples",
    source="api",
    priority=60,
    trigger=lambda s: (
        s.get("api") == "none"
        and s.get("backend") not in ("convex", "none")
        and bool(_selected(s, "examples"))
    ),
    overrides={"examples": []},
    target_note="API 'none' does not support examples: {category} will be set to '{value}'.",
    source_note="API 'none' requires {category} to be '{value}'.",
)

TODO_REQUIRES_DATABASE = CompatibilityRule(
    name="todo-requires-database",
    source="database",
    priority=62,
    trigger=lambda s: (
        s.get("database") == "none"
        and s.get("backend") != "convex"
        and "todo" in _selected(s, "examples")
    ),
    filters=(
        CategoryFilter(
            category="examples",
            disallowed=frozenset({"todo"}),
            target_note="Todo example requires a database. It will be removed.",
            source_note="Todo example requires a database. It will be removed.",
            message="Todo example removed (requires a database)",
        ),
    ),
)

AI_EXAMPLE_ELYSIA = CompatibilityRule(
    name="ai-elysia",
    source="backend",
    priority=64,
    trigger=lambda s: s.get("backend") == "elysia" and "ai" in _selected(s, "examples"),
    filters=(
        CategoryFilter(
            category="examples",
            disallowed=frozenset({"ai"}),
            target_note="AI example is not compatible with Elysia. It will be removed.",
            source_note="AI example is not compatible with Elysia. It will be removed.",
            message="AI example removed (not compatible with Elysia)",
        ),
    ),
)

AI_EXAMPLE_SOLID = CompatibilityRule(
    name="ai-solid",
    source="webFrontend",
    priority=66,
    trigger=lambda s: (
        "solid" in _selected(s, "webFrontend") and "ai" in _selected(s, "examples")
    ),
    filters=(
        CategoryFilter(
            category="examples",
            disallowed=frozenset({"ai"}),
            target_note="AI example is not compatible with Solid. It will be removed.",
            source_note="AI example is not compatible with Solid. It will be removed.",
            message="AI example removed (not compatible with Solid)",
        ),
    ),
)

FRONTEND_REQUIRES_ORPC = CompatibilityRule(
    name="frontend-requires-orpc",
    source="webFrontend",
    priority=70,
    trigger=lambda s: (
        s.get("api") == "trpc" and _has_any(s, "webFrontend", ORPC_FRONTENDS)
    ),
    overrides={"api": "orpc"},
    target_note="Nuxt, Svelte and Solid require oRPC: {category} will be set to '{value}'.",
    source_note="Selected frontend requires {category} to be '{value}'.",
)


# ---------------------------------------------------------------------------
# Add-on rules
# ---------------------------------------------------------------------------

PWA_REQUIRES_FRONTEND = CompatibilityRule(
    name="pwa-frontend",
    source="webFrontend",
    priority=80,
    trigger=lambda s: (
        "pwa" in _selected(s, "addons")
        and not _has_any(s, "webFrontend", PWA_FRONTENDS)
    ),
    filters=(
        CategoryFilter(
            category="addons",
            disallowed=frozenset({"pwa"}),
            target_note="PWA requires TanStack Router, React Router, Solid or Next.js. It has been removed.",
            source_note="PWA addon requires TanStack Router, React Router, Solid or Next.js.",
            message="PWA addon removed (requires compatible web frontend)",
        ),
    ),
)

TAURI_REQUIRES_FRONTEND = CompatibilityRule(
    name="tauri-frontend",
    source="webFrontend",
    priority=90,
    trigger=lambda s: (
        "tauri" in _selected(s, "addons")
        and not _has_any(s, "webFrontend", TAURI_FRONTENDS)
    ),
    filters=(
        CategoryFilter(
            category="addons",
            disallowed=frozenset({"tauri"}),
            target_note=(
                "Tauri requires TanStack Router, React Router, Nuxt, Svelte, "
                "Solid or Next.js. It has been removed."
            ),
            source_note=(
                "Tauri addon requires TanStack Router, React Router, Nuxt, "
                "Svelte, Solid or Next.js."
            ),
            message="Tauri addon removed (requires compatible web frontend)",
        ),
    ),
)

ULTRACITE_INCLUDES_BIOME = CompatibilityRule(
    name="ultracite-biome",
    source="addons",
    priority=100,
    trigger=lambda s: {"ultracite", "biome"} <= set(_selected(s, "addons")),
    filters=(
        CategoryFilter(
            category="addons",
            disallowed=frozenset({"biome"}),
            target_note="Ultracite includes Biome setup. Biome addon has been removed.",
            source_note="Ultracite includes Biome setup.",
            message="Biome addon removed (included in Ultracite)",
        ),
    ),
)


DEFAULT_RULES: tuple[CompatibilityRule, ...] = (
    CONVEX_BACKEND,
    NO_BACKEND,
    RUNTIME_NONE_REQUIRES_BACKEND,
    NO_DATABASE,
    TURSO_SETUP,
    PRISMA_POSTGRES_SETUP,
    MONGODB_ATLAS_SETUP,
    HOSTED_POSTGRES_SETUP,
    MONGODB_ORM,
    MONGOOSE_REQUIRES_MONGODB,
    API_NONE_EXAMPLES,
    TODO_REQUIRES_DATABASE,
    AI_EXAMPLE_ELYSIA,
    AI_EXAMPLE_SOLID,
    FRONTEND_REQUIRES_ORPC,
    PWA_REQUIRES_FRONTEND,
    TAURI_REQUIRES_FRONTEND,
    ULTRACITE_INCLUDES_BIOME,
)
