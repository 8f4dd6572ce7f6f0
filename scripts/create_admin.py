# flake8: noqa
# scripts/create_admin.py

"""
Bootstraps the 'admin' role and an administrator account.

    python scripts/create_admin.py --email admin@example.com --username admin
"""

import asyncio
import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.database import AsyncSessionLocal, engine
from bike_inventory.core.security import ADMIN_ROLE_NAME
from bike_inventory.domains.usr import crud as usr_crud
from bike_inventory.domains.usr import schemas as usr_schemas

cli = typer.Typer()


async def ensure_admin_role(db: AsyncSession) -> int:
    role = await usr_crud.role.get_by_name(db, name=ADMIN_ROLE_NAME)
    if role is None:
        role = await usr_crud.role.create(
            db, obj_in=usr_schemas.RoleCreate(name=ADMIN_ROLE_NAME, description="Full management rights")
        )
        typer.echo(f"Created role '{ADMIN_ROLE_NAME}' (id={role.id})")
    return role.id


async def create_admin_user(db: AsyncSession, user_in: usr_schemas.UserCreate) -> bool:
    """
    Creates the administrator; refuses when the username or email is taken by an active user.
    """
    if await usr_crud.user.get_by_username(db, username=user_in.username):
        typer.echo(f"Error: username already exists: {user_in.username}")
        return False
    if await usr_crud.user.get_by_attribute(db, attribute="email", value=user_in.email):
        typer.echo(f"Error: email already exists: {user_in.email}")
        return False

    user_in.role_id = await ensure_admin_role(db)
    user = await usr_crud.user.create(db, obj_in=user_in)
    typer.echo(f"Administrator created: {user.email} ({user.username}, id={user.id})")
    return True


@cli.command()
def main(
    email: str = typer.Option(
        ..., '--email', '-e',
        prompt="Administrator email",
        help="Email address of the administrator account."
    ),
    username: str = typer.Option(
        ..., '--username', '-u',
        prompt="Administrator username",
        help="Login name of the administrator account."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="Administrator password",
        hide_input=True,
        confirmation_prompt=True,
        help="Password of the administrator account (at least 8 characters)."
    ),
):
    """
    Creates a new administrator for the Bike Inventory API.
    """
    if len(password) < 8:
        typer.echo("Error: the password must be at least 8 characters long.")
        raise typer.Abort()

    user_data = usr_schemas.UserCreate(email=email, username=username, password=password)

    async def run_creation() -> bool:
        try:
            async with AsyncSessionLocal() as db:
                return await create_admin_user(db=db, user_in=user_data)
        finally:
            await engine.dispose()

    if not asyncio.run(run_creation()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
