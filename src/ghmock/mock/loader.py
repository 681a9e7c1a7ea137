"""
ghmock Backend Definition Files

YAML description of a mocked backend, turned into backend options.

Example file:

    endpoints:
      - endpoint: GET_USERS_BY_USERNAME
        responses:
          - {login: octocat}
      - method: GET
        pattern: /orgs/{org}/repos
        pages:
          - [{name: repo-a}, {name: repo-b}]
          - [{name: repo-c}]
      - method: GET
        pattern: /repos/{owner}/{repo}
        error: {status: 500, message: github went belly up}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .endpoints import lookup
from .errors import BackendFileError
from .handlers import write_error
from .options import (
    MockBackendOption,
    with_request_match,
    with_request_match_handler,
    with_request_match_pages
)
from .router import EndpointPattern

RESPONSE_KINDS = ('responses', 'pages', 'error')


@dataclass
class EndpointDefinition:
    """One mocked endpoint from a backend file."""

    endpoint: EndpointPattern
    kind: str  # responses, pages, error
    payload: Any

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 0) -> 'EndpointDefinition':
        """Create EndpointDefinition from dictionary."""
        if not isinstance(data, dict):
            raise BackendFileError(f"endpoint #{position} must be a mapping")

        if 'endpoint' in data:
            try:
                endpoint = lookup(str(data['endpoint']))
            except KeyError as e:
                raise BackendFileError(f"endpoint #{position}: {e.args[0]}") from None
        elif 'method' in data and 'pattern' in data:
            endpoint = EndpointPattern(str(data['pattern']), str(data['method']))
        else:
            raise BackendFileError(
                f"endpoint #{position} needs either 'endpoint' or both 'method' and 'pattern'"
            )

        kinds = [kind for kind in RESPONSE_KINDS if kind in data]
        if len(kinds) != 1:
            raise BackendFileError(
                f"endpoint #{position} ({endpoint.method} {endpoint.pattern}) "
                f"needs exactly one of {', '.join(RESPONSE_KINDS)}"
            )
        kind = kinds[0]
        payload = data[kind]

        if kind in ('responses', 'pages') and not isinstance(payload, list):
            raise BackendFileError(f"endpoint #{position}: '{kind}' must be a list")

        if kind == 'error':
            if not isinstance(payload, dict) or 'message' not in payload:
                raise BackendFileError(f"endpoint #{position}: 'error' needs a message")
            payload = {
                'status': int(payload.get('status', 500)),
                'message': str(payload['message'])
            }

        return cls(endpoint=endpoint, kind=kind, payload=payload)

    def to_option(self) -> MockBackendOption:
        """Build the backend option for this endpoint."""
        if self.kind == 'responses':
            return with_request_match(self.endpoint, self.payload)
        if self.kind == 'pages':
            return with_request_match_pages(self.endpoint, self.payload)

        status = self.payload['status']
        message = self.payload['message']
        return with_request_match_handler(
            self.endpoint,
            lambda request: write_error(status, message)
        )


@dataclass
class BackendDefinition:
    """A complete mocked backend."""

    endpoints: List[EndpointDefinition] = field(default_factory=list)
    source: Optional[str] = None

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'BackendDefinition':
        """Load backend definition from YAML file."""
        try:
            with open(yaml_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BackendFileError(f"{yaml_path}: invalid YAML: {e}") from e

        definition = cls.from_dict(data or {})
        definition.source = str(yaml_path)
        return definition

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BackendDefinition':
        """Create BackendDefinition from dictionary."""
        if not isinstance(data, dict):
            raise BackendFileError("backend definition must be a mapping")

        entries = data.get('endpoints', [])
        if not isinstance(entries, list):
            raise BackendFileError("'endpoints' must be a list")

        return cls(endpoints=[
            EndpointDefinition.from_dict(entry, position)
            for position, entry in enumerate(entries)
        ])

    def to_options(self) -> List[MockBackendOption]:
        return [endpoint.to_option() for endpoint in self.endpoints]


def load_backend_options(yaml_path: Union[str, Path]) -> List[MockBackendOption]:
    """
    Read backend options from a YAML definition file.

    Raises:
        FileNotFoundError: If the file does not exist
        BackendFileError: If the file is malformed
    """
    return BackendDefinition.from_yaml(yaml_path).to_options()
