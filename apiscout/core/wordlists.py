"""Path wordlists used by the probe stages.

Kept as immutable tuples and handed to the engine at construction time, so a
caller can swap or extend them without touching module state.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Tuple


COMMON_SWAGGER_PATHS = (
    "/swagger.json",
    "/openapi.json",
    "/openapi.yaml",
    "/openapi.yml",
    "/v1/openapi.json",
    "/v2/openapi.json",
    "/v3/openapi.json",
    "/v1/swagger.json",
    "/v2/swagger.json",
    "/v3/swagger.json",
    "/swagger/v1/swagger.json",
    "/swagger/v2/swagger.json",
    "/api-docs",
    "/api-docs.json",
    "/api-docs/swagger.json",
    "/v3/api-docs",
    "/v3/api-docs/swagger-config",
    "/swagger-resources",
    "/swagger-resources/configuration/ui",
    "/swagger-resources/configuration/security",
    "/swagger-ui/index.html",
    "/swagger-ui.html",
    "/swagger-ui/",
    "/docs/swagger.json",
    "/docs/openapi.json",
    "/docs/openapi.yaml",
    "/docs/swagger.yaml",
    "/api/openapi.json",
    "/api/swagger.json",
    "/.well-known/openapi.json",
    "/swagger.json.gz",
    "/openapi.json.gz",
    "/openapi/v1.json",
    "/openapi/v2.json",
    "/openapi/v3.json",
)

# Only probed with --fuzz
AGGRESSIVE_SWAGGER_PATHS = (
    "/api/v1/swagger.json", "/api/v2/swagger.json", "/api/v3/swagger.json",
    "/api/openapi.yaml", "/static/swagger.json", "/static/openapi.json",
    "/dist/openapi.json", "/openapi", "/swagger", "/v3/openapi.yaml",
    "/redoc", "/redoc/index.html", "/docs", "/docs/index.html", "/api/docs",
    "/apidocs", "/api-docs/v1", "/api-docs/v2", "/api-docs/v3",
    "/v1/api-docs", "/v2/api-docs", "/swagger/v3/swagger.json",
    "/api/swagger/v1/swagger.json", "/api/swagger/v2/swagger.json",
    "/api/swagger/v3/swagger.json", "/v1/openapi.yaml", "/v2/openapi.yaml",
    "/v1/openapi.yml", "/v2/openapi.yml", "/v3/openapi.yml",
    "/docs/openapi.yml", "/docs/swagger.yml",
    "/swagger-ui/index.html?url=/openapi.json",
    "/swagger-ui/index.html?url=/swagger.json",
    "/graphql", "/graphql/playground", "/graphiql", "/playground",
    "/api/graphql", "/rapi-doc", "/rapi-doc/index.html", "/rapipdf",
    "/rapipdf/index.html", "/elements", "/elements/index.html",
    "/docs/elements", "/postman.json", "/collection.json",
    "/collections.json", "/api/collection.json", "/asyncapi.json",
    "/asyncapi.yaml", "/asyncapi.yml", "/api-docs/index.html", "/help/api",
    "/developer", "/developers", "/reference",
    "/.well-known/apiconfig.json", "/apiconfig.json", "/env.json",
    "/service/openapi.json", "/services/openapi.json",
    "/gateway/openapi.json",
)

FUZZ_PREFIXES = (
    "/", "/api/", "/api/v1/", "/api/v2/", "/v1/", "/v2/", "/v3/",
    "/services/", "/public/", "/static/", "/backend/",
)

FUZZ_BASENAMES = (
    "swagger", "openapi", "api-docs", "api-docs.json", "v3/api-docs",
    "docs/openapi",
)

COMMON_CONFIG_PATHS = (
    "/.env",
    "/.env.local",
    "/.env.production",
    "/.env.development",
    "/env",
    "/config.js",
    "/config.json",
    "/appsettings.json",
    "/package.json",
    "/manifest.json",
    "/static/config.json",
    "/assets/config.json",
    "/config/settings.json",
    "/webpack.config.js",
    "/nuxt.config.js",
    "/vite.config.js",
    "/next.config.js",
    "/public/config.json",
    "/src/config.js",
    "/src/config/index.js",
    "/src/settings.js",
    "/src/settings/index.js",
    "/settings.js",
    "/settings.json",
    "/app/config.js",
    "/app/config.json",
    "/appsettings.Development.json",
    "/appsettings.Production.json",
    "/config/appsettings.json",
    "/config/appsettings.Development.json",
    "/config/appsettings.Production.json",
    "/server/config.js",
    "/server/config.json",
    "/backend/config.js",
    "/backend/config.json",
    "/public/env.js",
    "/public/env.json",
    "/public/config.js",
    "/config/local.js",
    "/config/local.json",
    "/config/default.js",
    "/config/default.json",
    "/config/production.js",
    "/config/production.json",
    "/config/development.js",
    "/config/development.json",
    "/settings.local.js",
    "/settings.local.json",
    "/settings.default.js",
    "/settings.default.json",
    "/settings.production.js",
    "/settings.production.json",
    "/settings.development.js",
    "/settings.development.json",
)


@dataclass(frozen=True)
class Wordlists:
    swagger_paths: Tuple[str, ...] = COMMON_SWAGGER_PATHS
    aggressive_paths: Tuple[str, ...] = AGGRESSIVE_SWAGGER_PATHS
    config_paths: Tuple[str, ...] = COMMON_CONFIG_PATHS
    fuzz_prefixes: Tuple[str, ...] = FUZZ_PREFIXES
    fuzz_basenames: Tuple[str, ...] = FUZZ_BASENAMES
    extra_paths: Tuple[str, ...] = ()

    def with_extra_paths(self, paths: Iterable[str]) -> "Wordlists":
        """Copy with user-supplied probe paths appended (blank lines dropped)."""
        cleaned = tuple(p.strip() for p in paths if p and p.strip())
        return replace(self, extra_paths=self.extra_paths + cleaned)


def load_paths_file(filename: str) -> Tuple[str, ...]:
    """Read a newline-delimited path list."""
    with open(filename, "r", encoding="utf-8", errors="ignore") as f:
        return tuple(line.strip() for line in f if line.strip())
