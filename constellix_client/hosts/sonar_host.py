"""
Sonar API host policy.

The Sonar monitoring API answers 200 or 201 on success and returns plain
text error bodies.
"""

from .base_host import HostPolicy

SONAR_API_HOST = "api.sonar.constellix.com"


class SonarHostPolicy(HostPolicy):
    """Error policy for the alternate Sonar API host."""

    name = SONAR_API_HOST
    success_codes = (200, 201)

    def extract_message(self, body: str) -> str:
        return body
