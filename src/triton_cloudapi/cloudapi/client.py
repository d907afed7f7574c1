"""Triton CloudAPI client.

Provides an HTTP client that signs every request with the account's RSA
key, sends it over httpx, and returns classified, typed results. Each
operation is a thin wrapper that builds a path and an optional JSON body.
"""

import dataclasses
import threading
import time
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from . import decoding, signing, types
from .decoding import DecodedResult
from .errors import TransportError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

# CloudAPI resolves "my" to the account that signed the request.
DEFAULT_LOGIN = "my"

FABRIC = "default"

# CloudAPI answers machine actions with 202 and an empty body.
ACCEPTED = 202


def _path(*segments: str) -> str:
    return "/" + "/".join(quote(str(segment), safe="") for segment in segments)


class CloudApiClient:
    """HTTP client for the Triton CloudAPI.

    Handles request signing, transport, and decoding of responses into the
    pydantic models in :mod:`.types`. Server-side failures are returned as
    :class:`~.decoding.ServerError` values rather than raised.

    Thread-safe through thread-local storage of httpx.Client instances.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        credential: signing.Credential,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the CloudAPI client.

        The private key is loaded once here, so a bad key fails before any
        request is attempted.

        Args:
            credential: Endpoint, account, key name and private key.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ValueError: If the endpoint is empty or timeout is not positive.
            SigningError: If the private key cannot be loaded.
        """
        if not credential.endpoint:
            msg = "credential endpoint cannot be empty"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.credential = dataclasses.replace(
            credential,
            private_key=signing.load_private_key(credential.private_key),
        )
        self.base_url = credential.endpoint.rstrip("/")
        self._timeout = timeout
        self._transport = transport

        # Use thread-local storage for httpx.Client (thread safety)
        self._local = threading.local()

    @property
    def client(self) -> httpx.Client:
        """Get or create the thread-local httpx client."""
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open."""
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def request(
        self,
        method: str,
        path: str,
        shape: Any = None,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> DecodedResult:
        """Sign and send a request, then classify and decode the response.

        Args:
            method: HTTP method.
            path: Path relative to the endpoint (e.g., "/my/machines").
            shape: Model class or ``list[Model]`` to decode a success body
                into; None returns the plain JSON value.
            body: Optional JSON request body.
            params: Optional query parameters.

        Returns:
            Success with the decoded value, or ServerError. A 202 Accepted
            comes back as a ServerError with status_code 202.

        Raises:
            SigningError: If the request cannot be signed.
            TransportError: If the HTTP request fails.
            DecodeError: If the response body cannot be decoded.
        """
        headers = signing.sign(self.credential).as_headers()
        start_time = time.time()

        try:
            logger.debug("Making API request", method=method, path=path, params=params)
            response = self.client.request(
                method,
                path,
                params=params,
                json=body,
                headers=headers,
            )
        except httpx.HTTPError as error:
            duration = time.time() - start_time
            logger.exception(
                "API request failed",
                method=method,
                path=path,
                duration_seconds=round(duration, 3),
            )
            msg = f"{method} {path} failed: {error}"
            raise TransportError(msg) from error

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            status_code=response.status_code,
            duration_seconds=round(duration, 3),
        )

        raw = decoding.RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
        result = decoding.classify_and_decode(raw, shape)
        if isinstance(result, decoding.ServerError):
            if result.status_code == ACCEPTED:
                logger.debug("API request accepted", method=method, path=path)
            else:
                logger.warning(
                    "API error response",
                    method=method,
                    path=path,
                    status_code=result.status_code,
                    code=result.code,
                )
        return result

    def _get(self, path: str, shape: Any = None, params: dict[str, Any] | None = None):
        return self.request("GET", path, shape=shape, params=params)

    def _post(
        self,
        path: str,
        shape: Any = None,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ):
        return self.request("POST", path, shape=shape, body=body, params=params)

    def _put(self, path: str, shape: Any = None, body: Any = None):
        return self.request("PUT", path, shape=shape, body=body)

    def _delete(self, path: str):
        return self.request("DELETE", path)

    # Account

    def get_account(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve the account details.

        Args:
            login: Account login; "my" is the signing account.

        Returns:
            Success with an Account, or ServerError.
        """
        return self._get(_path(login), types.Account)

    def update_account(
        self, account: types.Account, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Update the account's contact details.

        Args:
            account: Fields to change; unset fields are not sent.
            login: Account login.

        Returns:
            Success with the updated Account, or ServerError.
        """
        return self._post(_path(login), types.Account, body=account.to_body())

    # Keys

    def list_keys(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the public keys on record for the account.

        Args:
            login: Account login.

        Returns:
            Success with a list of Key, or ServerError.
        """
        return self._get(_path(login, "keys"), list[types.Key])

    def get_key(
        self, name_or_fingerprint: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Retrieve one public key.

        Args:
            name_or_fingerprint: Key name or MD5 fingerprint.
            login: Account login.

        Returns:
            Success with a Key, or ServerError.
        """
        return self._get(_path(login, "keys", name_or_fingerprint), types.Key)

    def create_key(self, key: types.Key, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Upload a new OpenSSH public key for HTTP signing and SSH.

        Args:
            key: Key with ``name`` and ``key`` set.
            login: Account login.

        Returns:
            Success with the stored Key, or ServerError.
        """
        return self._post(_path(login, "keys"), types.Key, body=key.to_body())

    def delete_key(
        self, name_or_fingerprint: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Remove a public key.

        Args:
            name_or_fingerprint: Key name or MD5 fingerprint.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "keys", name_or_fingerprint))

    # Users

    def list_users(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the account's sub-users.

        Args:
            login: Account login.

        Returns:
            Success with a list of Account, or ServerError.
        """
        return self._get(_path(login, "users"), list[types.Account])

    def get_user(self, user_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one sub-user.

        Args:
            user_id: Sub-user id or login.
            login: Account login.

        Returns:
            Success with an Account, or ServerError.
        """
        return self._get(_path(login, "users", user_id), types.Account)

    def create_user(self, user: types.Account, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Create a sub-user.

        Args:
            user: The new user's login, email and details.
            login: Account login.

        Returns:
            Success with the created Account, or ServerError.
        """
        return self._post(_path(login, "users"), types.Account, body=user.to_body())

    def update_user(self, user: types.Account, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Update a user's modifiable properties (not the password).

        Args:
            user: The user to update; ``id`` selects it.
            login: Account login.

        Returns:
            Success with the updated Account, or ServerError.

        Raises:
            ValueError: If ``user.id`` is not set.
        """
        if user.id is None:
            msg = "user id is required to update a user"
            raise ValueError(msg)
        return self._post(_path(login, "users", user.id), types.Account, body=user.to_body())

    def change_user_password(
        self, user_id: str, password: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Set a sub-user's password.

        Args:
            user_id: Sub-user id or login.
            password: New password, sent along with its confirmation.
            login: Account login.

        Returns:
            Success with the Account, or ServerError.
        """
        body = {"password": password, "password_confirmation": password}
        return self._post(
            _path(login, "users", user_id, "change_password"), types.Account, body=body
        )

    def delete_user(self, user_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete a sub-user.

        Args:
            user_id: Sub-user id or login.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "users", user_id))

    # Roles and policies

    def list_roles(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List roles with their policies and members.

        Args:
            login: Account login.

        Returns:
            Success with a list of Role, or ServerError.
        """
        return self._get(_path(login, "roles"), list[types.Role])

    def get_role(self, role_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one role.

        Args:
            role_id: Role id or name.
            login: Account login.

        Returns:
            Success with a Role, or ServerError.
        """
        return self._get(_path(login, "roles", role_id), types.Role)

    def create_role(self, role: types.Role, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Create a role.

        Args:
            role: Role name with optional policies and members.
            login: Account login.

        Returns:
            Success with the created Role, or ServerError.
        """
        return self._post(_path(login, "roles"), types.Role, body=role.to_body())

    def delete_role(self, role_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete a role.

        Args:
            role_id: Role id or name.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "roles", role_id))

    def list_policies(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List access policies.

        Args:
            login: Account login.

        Returns:
            Success with a list of Policy, or ServerError.
        """
        return self._get(_path(login, "policies"), list[types.Policy])

    def get_policy(self, policy_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one policy.

        Args:
            policy_id: Policy id or name.
            login: Account login.

        Returns:
            Success with a Policy, or ServerError.
        """
        return self._get(_path(login, "policies", policy_id), types.Policy)

    def create_policy(
        self, policy: types.Policy, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Create a policy from a list of Aperture rules.

        Args:
            policy: Policy name, rules and description.
            login: Account login.

        Returns:
            Success with the created Policy, or ServerError.
        """
        return self._post(_path(login, "policies"), types.Policy, body=policy.to_body())

    def delete_policy(self, policy_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete a policy.

        Args:
            policy_id: Policy id or name.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "policies", policy_id))

    # Config, datacenters and services

    def get_config(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve the account configuration.

        Args:
            login: Account login.

        Returns:
            Success with a Config, or ServerError.
        """
        return self._get(_path(login, "config"), types.Config)

    def update_config(
        self, config: types.Config, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Replace the account configuration, such as the default network.

        Args:
            config: New configuration values.
            login: Account login.

        Returns:
            Success with the stored Config, or ServerError.
        """
        return self._put(_path(login, "config"), types.Config, body=config.to_body())

    def list_datacenters(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Map of datacenter names to their CloudAPI URLs.

        Args:
            login: Account login.

        Returns:
            Success with a plain ``dict[str, str]``, or ServerError.
        """
        return self._get(_path(login, "datacenters"))

    def list_services(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Map of service names to their endpoints in this datacenter.

        Args:
            login: Account login.

        Returns:
            Success with a plain ``dict[str, str]``, or ServerError.
        """
        return self._get(_path(login, "services"))

    # Images and packages

    def list_images(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the images available to the account.

        Args:
            login: Account login.

        Returns:
            Success with a list of Image, or ServerError.
        """
        return self._get(_path(login, "images"), list[types.Image])

    def get_image(self, image_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one image.

        Args:
            image_id: Image UUID.
            login: Account login.

        Returns:
            Success with an Image, or ServerError.
        """
        return self._get(_path(login, "images", image_id), types.Image)

    def delete_image(self, image_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete an image owned by the account.

        Args:
            image_id: Image UUID.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "images", image_id))

    def create_image_from_machine(
        self, create_image: types.CreateImageFromMachine, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Create an image from a stopped machine.

        Args:
            create_image: Source machine, name, version and metadata.
            login: Account login.

        Returns:
            Success with the new Image (state "creating"), or ServerError.
        """
        return self._post(_path(login, "images"), types.Image, body=create_image.to_body())

    def clone_image(self, image_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Clone a shared image into the account.

        Args:
            image_id: UUID of the image shared with the account.
            login: Account login.

        Returns:
            Success with the cloned Image, or ServerError.
        """
        return self._post(
            _path(login, "images", image_id), types.Image, params={"action": "clone"}
        )

    def list_packages(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the provisioning packages.

        Args:
            login: Account login.

        Returns:
            Success with a list of Package, or ServerError.
        """
        return self._get(_path(login, "packages"), list[types.Package])

    def get_package(self, package_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one package.

        Args:
            package_id: Package UUID or name.
            login: Account login.

        Returns:
            Success with a Package, or ServerError.
        """
        return self._get(_path(login, "packages", package_id), types.Package)

    # Machines

    def list_machines(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the account's machines.

        Args:
            login: Account login.

        Returns:
            Success with a list of Machine, or ServerError.
        """
        return self._get(_path(login, "machines"), list[types.Machine])

    def get_machine(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success with a Machine, or ServerError.
        """
        return self._get(_path(login, "machines", machine_id), types.Machine)

    def create_machine(
        self, machine: types.CreateMachine, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Provision a new machine.

        Args:
            machine: Image, package and optional name, networks and metadata.
            login: Account login.

        Returns:
            Success with the new Machine (state "provisioning"), or
            ServerError.
        """
        return self._post(_path(login, "machines"), types.Machine, body=machine.to_body())

    def delete_machine(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Destroy a machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "machines", machine_id))

    def _machine_action(
        self, machine_id: str, action: str, login: str, **params: str
    ) -> DecodedResult:
        return self._post(
            _path(login, "machines", machine_id), params={"action": action, **params}
        )

    def stop_machine(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Stop a running machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "stop", login)

    def start_machine(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Start a stopped machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "start", login)

    def reboot_machine(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Reboot a machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "reboot", login)

    def resize_machine(
        self, machine_id: str, package_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Move a machine to another package.

        Args:
            machine_id: Machine UUID.
            package_id: UUID or name of the target package.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "resize", login, package=package_id)

    def rename_machine(
        self, machine_id: str, name: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Rename a machine.

        Args:
            machine_id: Machine UUID.
            name: New machine alias.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "rename", login, name=name)

    def enable_machine_firewall(
        self, machine_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Turn on the firewall for a machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "enable_firewall", login)

    def disable_machine_firewall(
        self, machine_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Turn off the firewall for a machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            ServerError with status_code 202 when the action was accepted;
            any other ServerError is a rejection.
        """
        return self._machine_action(machine_id, "disable_firewall", login)

    def list_machine_snapshots(
        self, machine_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """List a machine's snapshots.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success with a list of MachineSnapshot, or ServerError.
        """
        return self._get(
            _path(login, "machines", machine_id, "snapshots"), list[types.MachineSnapshot]
        )

    def create_machine_snapshot(
        self, machine_id: str, name: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Snapshot a machine.

        Args:
            machine_id: Machine UUID.
            name: Snapshot name.
            login: Account login.

        Returns:
            Success with the MachineSnapshot, or ServerError.
        """
        return self._post(
            _path(login, "machines", machine_id, "snapshots"),
            types.MachineSnapshot,
            body={"name": name},
        )

    def delete_machine_snapshot(
        self, machine_id: str, name: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Delete a machine snapshot.

        Args:
            machine_id: Machine UUID.
            name: Snapshot name.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "machines", machine_id, "snapshots", name))

    def list_machine_tags(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve a machine's tags.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success with a plain tag mapping, or ServerError.
        """
        return self._get(_path(login, "machines", machine_id, "tags"))

    def add_machine_tags(
        self, machine_id: str, tags: dict[str, Any], *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Add tags to a machine, keeping the ones it already has.

        Args:
            machine_id: Machine UUID.
            tags: Tag names and values to set.
            login: Account login.

        Returns:
            Success with the full tag mapping, or ServerError.
        """
        return self._post(_path(login, "machines", machine_id, "tags"), body=tags)

    def delete_machine_tag(
        self, machine_id: str, tag: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Remove one tag from a machine.

        Args:
            machine_id: Machine UUID.
            tag: Tag name.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "machines", machine_id, "tags", tag))

    # Migrations

    def list_migrations(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List machine migrations.

        Args:
            login: Account login.

        Returns:
            Success with a list of Migration, or ServerError.
        """
        return self._get(_path(login, "migrations"), list[types.Migration])

    def get_migration(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve the migration of one machine.

        Args:
            machine_id: UUID of the migrating machine.
            login: Account login.

        Returns:
            Success with a Migration, or ServerError.
        """
        return self._get(_path(login, "migrations", machine_id), types.Migration)

    def migrate(
        self,
        machine_id: str,
        action: str,
        affinity: list[str] | None = None,
        *,
        login: str = DEFAULT_LOGIN,
    ) -> DecodedResult:
        """Begin, sync, switch, pause, abort or finalize a machine migration.

        Args:
            machine_id: Machine UUID.
            action: Migration action name, such as "begin" or "switch".
            affinity: Optional placement rules for "begin".
            login: Account login.

        Returns:
            Success with the Migration, or ServerError.
        """
        body: dict[str, Any] = {"action": action}
        if affinity:
            body["affinity"] = affinity
        return self._post(
            _path(login, "machines", machine_id, "migrate"), types.Migration, body=body
        )

    # Firewall rules

    def list_firewall_rules(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List firewall rules.

        Args:
            login: Account login.

        Returns:
            Success with a list of FirewallRule, or ServerError.
        """
        return self._get(_path(login, "fwrules"), list[types.FirewallRule])

    def get_firewall_rule(self, rule_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one firewall rule.

        Args:
            rule_id: Rule UUID.
            login: Account login.

        Returns:
            Success with a FirewallRule, or ServerError.
        """
        return self._get(_path(login, "fwrules", rule_id), types.FirewallRule)

    def create_firewall_rule(
        self, rule: types.FirewallRule, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Create a firewall rule.

        Args:
            rule: Rule text, enabled flag and description.
            login: Account login.

        Returns:
            Success with the created FirewallRule, or ServerError.
        """
        return self._post(_path(login, "fwrules"), types.FirewallRule, body=rule.to_body())

    def update_firewall_rule(
        self, rule: types.FirewallRule, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Update a firewall rule.

        Args:
            rule: The rule to update; ``id`` selects it.
            login: Account login.

        Returns:
            Success with the updated FirewallRule, or ServerError.

        Raises:
            ValueError: If ``rule.id`` is not set.
        """
        if rule.id is None:
            msg = "rule id is required to update a firewall rule"
            raise ValueError(msg)
        return self._post(
            _path(login, "fwrules", rule.id), types.FirewallRule, body=rule.to_body()
        )

    def enable_firewall_rule(self, rule_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Enable a firewall rule.

        Args:
            rule_id: Rule UUID.
            login: Account login.

        Returns:
            Success with the FirewallRule, or ServerError.
        """
        return self._post(_path(login, "fwrules", rule_id, "enable"), types.FirewallRule)

    def disable_firewall_rule(
        self, rule_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Disable a firewall rule.

        Args:
            rule_id: Rule UUID.
            login: Account login.

        Returns:
            Success with the FirewallRule, or ServerError.
        """
        return self._post(_path(login, "fwrules", rule_id, "disable"), types.FirewallRule)

    def delete_firewall_rule(
        self, rule_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Delete a firewall rule.

        Args:
            rule_id: Rule UUID.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "fwrules", rule_id))

    def list_machine_firewall_rules(
        self, machine_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """List the firewall rules that apply to one machine.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success with a list of FirewallRule, or ServerError.
        """
        return self._get(
            _path(login, "machines", machine_id, "fwrules"), list[types.FirewallRule]
        )

    # Fabric VLANs and networks

    def list_fabric_vlans(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the VLANs on the default fabric.

        Args:
            login: Account login.

        Returns:
            Success with a list of VLAN, or ServerError.
        """
        return self._get(_path(login, "fabrics", FABRIC, "vlans"), list[types.VLAN])

    def get_fabric_vlan(self, vlan_id: int, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one fabric VLAN.

        Args:
            vlan_id: VLAN tag.
            login: Account login.

        Returns:
            Success with a VLAN, or ServerError.
        """
        return self._get(_path(login, "fabrics", FABRIC, "vlans", vlan_id), types.VLAN)

    def create_fabric_vlan(
        self, vlan: types.VLAN, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Create a VLAN on the default fabric.

        Args:
            vlan: VLAN tag, name and description.
            login: Account login.

        Returns:
            Success with the created VLAN, or ServerError.
        """
        return self._post(
            _path(login, "fabrics", FABRIC, "vlans"), types.VLAN, body=vlan.to_body()
        )

    def delete_fabric_vlan(self, vlan_id: int, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete a fabric VLAN.

        Args:
            vlan_id: VLAN tag.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "fabrics", FABRIC, "vlans", vlan_id))

    def list_fabric_networks(
        self, vlan_id: int, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """List the networks on one fabric VLAN.

        Args:
            vlan_id: VLAN tag.
            login: Account login.

        Returns:
            Success with a list of Network, or ServerError.
        """
        return self._get(
            _path(login, "fabrics", FABRIC, "vlans", vlan_id, "networks"),
            list[types.Network],
        )

    # Networks and NICs

    def list_networks(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the networks available to the account.

        Args:
            login: Account login.

        Returns:
            Success with a list of Network, or ServerError.
        """
        return self._get(_path(login, "networks"), list[types.Network])

    def get_network(self, network_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one network.

        Args:
            network_id: Network UUID.
            login: Account login.

        Returns:
            Success with a Network, or ServerError.
        """
        return self._get(_path(login, "networks", network_id), types.Network)

    def list_network_ips(
        self, network_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """List the IPs in use on a network.

        Args:
            network_id: Network UUID.
            login: Account login.

        Returns:
            Success with a list of NetworkIP, or ServerError.
        """
        return self._get(_path(login, "networks", network_id, "ips"), list[types.NetworkIP])

    def list_nics(self, machine_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List a machine's NICs.

        Args:
            machine_id: Machine UUID.
            login: Account login.

        Returns:
            Success with a list of NIC, or ServerError.
        """
        return self._get(_path(login, "machines", machine_id, "nics"), list[types.NIC])

    def add_nic(
        self, machine_id: str, network_id: str, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Attach a NIC on a network to a machine.

        Args:
            machine_id: Machine UUID.
            network_id: UUID of the network to attach.
            login: Account login.

        Returns:
            Success with the NIC (state "provisioning"), or ServerError.
        """
        return self._post(
            _path(login, "machines", machine_id, "nics"),
            types.NIC,
            body={"network": network_id},
        )

    def remove_nic(self, machine_id: str, mac: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Detach a NIC from a machine.

        Args:
            machine_id: Machine UUID.
            mac: NIC MAC address.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "machines", machine_id, "nics", mac))

    # Volumes

    def list_volumes(self, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """List the account's volumes.

        Args:
            login: Account login.

        Returns:
            Success with a list of Volume, or ServerError.
        """
        return self._get(_path(login, "volumes"), list[types.Volume])

    def get_volume(self, volume_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Retrieve one volume.

        Args:
            volume_id: Volume UUID.
            login: Account login.

        Returns:
            Success with a Volume, or ServerError.
        """
        return self._get(_path(login, "volumes", volume_id), types.Volume)

    def create_volume(
        self, volume: types.Volume, *, login: str = DEFAULT_LOGIN
    ) -> DecodedResult:
        """Create an NFS volume.

        Args:
            volume: Name, size, type and networks of the volume.
            login: Account login.

        Returns:
            Success with the created Volume, or ServerError.
        """
        return self._post(_path(login, "volumes"), types.Volume, body=volume.to_body())

    def delete_volume(self, volume_id: str, *, login: str = DEFAULT_LOGIN) -> DecodedResult:
        """Delete a volume.

        Args:
            volume_id: Volume UUID.
            login: Account login.

        Returns:
            Success(None) on 204, or ServerError.
        """
        return self._delete(_path(login, "volumes", volume_id))
