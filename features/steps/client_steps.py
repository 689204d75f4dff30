"""
Step definitions for Constellix Client integration tests.
"""

import shlex

from behave import given, when, then

from constellix_client.cli.main import main
from constellix_client.core.client import ConstellixClient
from constellix_client.core.errors import APIError
from constellix_client.core.rate_limiter import RateLimiter
from constellix_client.transport.mock_adapter import MockAdapter
from constellix_client.utils.signer import SECURITY_TOKEN_HEADER


def _build_client(context, mock_config):
    context.adapter = MockAdapter(mock_config)
    context.client = ConstellixClient.from_config(context.test_config, transport=context.adapter)
    context.client.rate_limiter = RateLimiter(sleep=context.sleeps.append)


def _send(context, operation, *args):
    try:
        context.responses.append(operation(*args))
    except APIError as e:
        context.error = e


@given("the Constellix client is configured with the mock transport")
def step_impl(context):
    """Configure the client against the in-memory backends."""
    _build_client(context, context.test_config["mock"])
    assert context.client is not None


@given('I have a domain payload for "{name}"')
def step_impl(context, name):
    """Prepare a domain payload."""
    context.payload = {"names": [name]}


@given("the mock backend allows {limit:d} requests per window with a {interval:d} second refresh interval")
def step_impl(context, limit, interval):
    """Rebuild the client against a tightly limited backend."""
    _build_client(context, {"limit": limit, "refresh_interval": interval})


@when("I create the domain on the DNS API")
def step_impl(context):
    """Create the domain."""
    _send(context, context.client.create, context.payload, "v1/domains")
    assert context.error is None, f"Create failed: {context.error}"
    context.created = context.responses[-1].json()


@when("I fetch the created domain")
def step_impl(context):
    """Fetch the domain created earlier."""
    _send(context, context.client.fetch, f"v1/domains/{context.created['id']}")


@when('I fetch the domain "{endpoint}"')
def step_impl(context, endpoint):
    """Fetch a domain by endpoint."""
    _send(context, context.client.fetch, endpoint)


@when("I fetch the domain list {count:d} times")
def step_impl(context, count):
    """Fetch the domain list repeatedly."""
    for _ in range(count):
        _send(context, context.client.fetch, "v1/domains")


@when("I create an HTTP check on the Sonar API")
def step_impl(context):
    """Create a Sonar HTTP check."""
    check = {"name": "homepage", "host": "example.com", "port": 443}
    _send(context, context.client.create, check, context.sonar_url)


@when("I delete the Sonar check {check_id:d}")
def step_impl(context, check_id):
    """Delete a Sonar check."""
    _send(context, context.client.delete, f"{context.sonar_url}/{check_id}")


@when('I run the CLI with "{arguments}"')
def step_impl(context, arguments):
    """Run the command-line interface."""
    argv = ["--config", str(context.test_config_file)] + shlex.split(arguments)
    try:
        main(argv)
    except SystemExit as e:
        context.exit_code = e.code


@then('the response should contain the domain "{name}"')
def step_impl(context, name):
    """Verify the fetched domain."""
    assert context.error is None, f"Request failed: {context.error}"
    assert context.responses[-1].json()["names"] == [name]


@then("every request should carry a signed security token")
def step_impl(context):
    """Verify every request was signed with the configured API key."""
    api_key = context.test_config["constellix"]["api_key"]
    for request in context.adapter.requests:
        token = request.headers[SECURITY_TOKEN_HEADER]
        key, signature, millis = token.split(":")
        assert key == api_key
        assert signature
        assert millis.isdigit()
        assert request.headers["Content-Type"] == "application/json"


@then("an API error with status {status:d} should be raised")
def step_impl(context, status):
    """Verify an API error was raised."""
    assert context.error is not None, "Expected an API error"
    assert context.error.status_code == status, f"Got HTTP {context.error.status_code}"


@then('the error message should be "{message}"')
def step_impl(context, message):
    """Verify the normalized error message."""
    assert str(context.error) == message, f"Got message {str(context.error)!r}"


@then("the response status should be {status:d}")
def step_impl(context, status):
    """Verify the last response status."""
    assert context.error is None, f"Request failed: {context.error}"
    assert context.responses[-1].status_code == status


@then("the last request should be sent to the Sonar URL unchanged")
def step_impl(context):
    """Verify the Sonar URL was not rewritten."""
    assert context.adapter.requests[-1].url == context.sonar_url


@then("the client should not have waited")
def step_impl(context):
    """Verify the throttle did not engage."""
    assert context.sleeps == [], f"Client slept {context.sleeps}"


@then("the client should have waited {seconds:d} seconds")
def step_impl(context, seconds):
    """Verify the throttle engaged once for the refresh interval."""
    assert context.sleeps == [seconds], f"Client slept {context.sleeps}"


@then("the client should have sent {count:d} requests")
def step_impl(context, count):
    """Verify the request counter."""
    assert context.client.total_requests == count


@then("the CLI should exit with status {code:d}")
def step_impl(context, code):
    """Verify the CLI exit status."""
    assert context.exit_code == code, f"CLI exited with {context.exit_code}"
