"""
Core Layer - Embed Token Workflow and Configuration
===================================================

Modules:
    authkit: ``AuthKit`` client and the connected platform filter
    endpoints: Endpoint/header enums and URL resolution
    exceptions: Errors raised by individual platform calls
    constants: Origins, header names, timeouts and Pydantic settings

See Also:
    :mod:`authkit.models`: Platform payload and result models
"""
