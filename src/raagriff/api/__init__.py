"""HTTP layer: dependencies, cookie handling, exception handlers and routers."""
