"""Library API core package.

Modules:
- config: INI parsing and config object
- database: pooled Oracle connections and the per-request connection template
- errors: API exceptions and their JSON handlers
- models: request bodies
- app: FastAPI app, middleware and uvicorn runner
"""
