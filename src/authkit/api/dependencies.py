from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from authkit.core.authkit import AuthKit


def get_authkit(request: Request) -> AuthKit:
    """Get the shared AuthKit client from application state."""
    authkit: AuthKit = request.app.state.authkit
    return authkit


AuthKitDep = Annotated[AuthKit, Depends(get_authkit)]
