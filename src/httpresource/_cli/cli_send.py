import json
import sys

import click
from dotenv import load_dotenv

from .._utils._work_queue import Priority
from .._utils.constants import DOTENV_FILE, METHODS
from ..resource import Resource
from ._utils import read_images, split_pairs


@click.command()
@click.argument("method", type=click.Choice(METHODS, case_sensitive=False))
@click.argument("url")
@click.option("--param", "-p", multiple=True, help="Query parameter as name=value")
@click.option("--form", "-f", multiple=True, help="Form field as name=value")
@click.option("--header", "-H", multiple=True, help="Header as name:value")
@click.option(
    "--image",
    "-i",
    multiple=True,
    help="Binary part as field=path, sent as image/png",
)
@click.option("--user", help="Basic auth user")
@click.option("--password", help="Basic auth password")
@click.option("--timeout", type=float, help="Transport timeout in seconds")
@click.option(
    "--priority",
    type=click.Choice(list(Priority.__members__), case_sensitive=False),
    help="Queue priority",
)
@click.option(
    "--wait",
    "wait_seconds",
    type=float,
    default=120.0,
    show_default=True,
    help="Seconds to wait for the response before giving up",
)
def send(
    method: str,
    url: str,
    param: tuple[str, ...],
    form: tuple[str, ...],
    header: tuple[str, ...],
    image: tuple[str, ...],
    user: str | None,
    password: str | None,
    timeout: float | None,
    priority: str | None,
    wait_seconds: float,
):
    r"""Send a single request and print the JSON response.

    \b
    Examples:
        httpresource send GET https://httpbin.org/get -p q=search
        httpresource send POST https://httpbin.org/post -f name=joe -i avatar=me.png
        httpresource send DELETE https://api.example.com/items/1 --user u --password p
    """
    load_dotenv(DOTENV_FILE)

    resource = Resource(method.upper(), url).params(split_pairs(param, "=", "param"))

    for name, value in split_pairs(form, "=", "form field").items():
        resource.form(name, value)
    for name, value in split_pairs(header, ":", "header", strip=True).items():
        resource.header(name, value)
    for field_name, data in read_images(image).items():
        resource.image(data, field_name)
    if user is not None and password is not None:
        resource.basic(user, password)
    if timeout is not None:
        resource.timeout(timeout)
    if priority is not None:
        resource.priority(Priority[priority.upper()])

    if not resource.send().wait(wait_seconds):
        resource.cancel()
        click.echo(f"❌ No response within {wait_seconds} seconds", err=True)
        raise click.Abort()

    click.echo(json.dumps(resource.outcome.response, indent=2))
    if resource.is_failure:
        sys.exit(1)
