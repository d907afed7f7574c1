"""Resource types for the Triton CloudAPI.

Pydantic models with one canonical shape per resource. Every field is
optional: keys missing from a response decode to ``None`` and unknown keys
are ignored. Primitive fields are strict, so a wire string is never turned
into a number or a boolean. Timestamps and UUIDs stay as the strings the API
sends.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


class CloudApiModel(BaseModel):
    """Base for all CloudAPI resources."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        """Encode as a JSON request body, leaving out unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# Account, users and keys


class Account(CloudApiModel):
    """Account or sub-user record."""

    id: StrictStr | None = None
    login: StrictStr | None = None
    email: StrictStr | None = None
    company_name: StrictStr | None = None
    first_name: StrictStr | None = None
    last_name: StrictStr | None = None
    address: StrictStr | None = None
    postal_code: StrictStr | None = None
    city: StrictStr | None = None
    state: StrictStr | None = None
    country: StrictStr | None = None
    phone: StrictStr | None = None
    created_at: StrictStr | None = None
    updated_at: StrictStr | None = None
    triton_cns_enabled: StrictBool | None = None


class Key(CloudApiModel):
    fingerprint: StrictStr | None = None
    name: StrictStr | None = None
    key: StrictStr | None = None
    attested: StrictBool | None = None
    multifactor: list[StrictStr] | None = None


class Config(CloudApiModel):
    default_network: StrictStr | None = None


# Roles and policies


class RolePolicy(CloudApiModel):
    id: StrictStr | None = None
    name: StrictStr | None = None


class RoleMember(CloudApiModel):
    id: StrictStr | None = None
    type: StrictStr | None = None
    login: StrictStr | None = None
    default: StrictBool | None = None


class Role(CloudApiModel):
    """Role with its attached policies and members."""

    id: StrictStr | None = None
    name: StrictStr | None = None
    policies: list[RolePolicy] | None = None
    members: list[RoleMember] | None = None


class Policy(CloudApiModel):
    id: StrictStr | None = None
    name: StrictStr | None = None
    rules: list[StrictStr] | None = None
    description: StrictStr | None = None


# Images and packages


class ImageRequirements(CloudApiModel):
    min_ram: StrictInt | None = None
    max_ram: StrictInt | None = None
    min_memory: StrictInt | None = None
    max_memory: StrictInt | None = None
    brand: StrictStr | None = None


class ImageFile(CloudApiModel):
    compression: StrictStr | None = None
    sha1: StrictStr | None = None
    size: StrictInt | None = None


class Image(CloudApiModel):
    """Image with its embedded requirements and file list."""

    id: StrictStr | None = None
    name: StrictStr | None = None
    version: StrictStr | None = None
    os: StrictStr | None = None
    type: StrictStr | None = None
    homepage: StrictStr | None = None
    description: StrictStr | None = None
    state: StrictStr | None = None
    public: StrictBool | None = None
    owner: StrictStr | None = None
    tags: dict[str, Any] | None = None
    error: dict[str, Any] | None = None
    published_at: StrictStr | None = None
    eula: StrictStr | None = None
    acl: list[StrictStr] | None = None
    requirements: ImageRequirements | None = None
    files: list[ImageFile] | None = None


class CreateImageFromMachine(CloudApiModel):
    machine: StrictStr | None = None
    name: StrictStr | None = None
    version: StrictStr | None = None
    description: StrictStr | None = None
    homepage: StrictStr | None = None
    eula: StrictStr | None = None
    acl: list[StrictStr] | None = None
    tags: dict[str, Any] | None = None


class Package(CloudApiModel):
    id: StrictStr | None = None
    name: StrictStr | None = None
    memory: StrictInt | None = None
    disk: StrictInt | None = None
    swap: StrictInt | None = None
    lwps: StrictInt | None = None
    vcpus: StrictInt | None = None
    version: StrictStr | None = None
    group: StrictStr | None = None
    description: StrictStr | None = None
    flexible_disk: StrictBool | None = None


# Machines


class MachineDisk(CloudApiModel):
    id: StrictStr | None = None
    boot: StrictBool | None = None
    size: StrictInt | None = None
    image: StrictStr | None = None


class Machine(CloudApiModel):
    """Virtual machine or container instance."""

    id: StrictStr | None = None
    name: StrictStr | None = None
    type: StrictStr | None = None
    brand: StrictStr | None = None
    state: StrictStr | None = None
    image: StrictStr | None = None
    memory: StrictInt | None = None
    disk: StrictInt | None = None
    metadata: dict[str, Any] | None = None
    tags: dict[str, Any] | None = None
    docker: StrictBool | None = None
    primary_ip: StrictStr | None = None
    ips: list[StrictStr] | None = None
    networks: list[StrictStr] | None = None
    firewall_enabled: StrictBool | None = None
    deletion_protection: StrictBool | None = None
    compute_node: StrictStr | None = None
    package: StrictStr | None = None
    flexible: StrictBool | None = None
    free_space: StrictInt | None = None
    disks: list[MachineDisk] | None = None
    created_at: StrictStr | None = None
    updated_at: StrictStr | None = None


class MachineSnapshot(CloudApiModel):
    name: StrictStr | None = None
    state: StrictStr | None = None
    size: StrictInt | None = None
    created_at: StrictStr | None = None
    updated_at: StrictStr | None = None


class CreateMachineVolume(CloudApiModel):
    name: StrictStr | None = None
    type: StrictStr | None = None
    mode: StrictStr | None = None
    mountpoint: StrictStr | None = None


class CreateMachine(CloudApiModel):
    """Request body for provisioning a machine."""

    name: StrictStr | None = None
    package: StrictStr | None = None
    image: StrictStr | None = None
    networks: list[StrictStr] | None = None
    affinity: list[StrictStr] | None = None
    metadata: dict[str, Any] | None = None
    tags: dict[str, Any] | None = None
    firewall_enabled: StrictBool | None = None
    deletion_protection: StrictBool | None = None
    allow_shared_images: StrictBool | None = None
    volumes: list[CreateMachineVolume] | None = None
    disks: list[MachineDisk] | None = None


# Migrations


class MigrationProgress(CloudApiModel):
    type: StrictStr | None = None
    duration_ms: StrictInt | None = None
    started_at: StrictStr | None = None
    finished_at: StrictStr | None = None
    message: StrictStr | None = None
    phase: StrictStr | None = None
    state: StrictStr | None = None
    current_progress: StrictInt | None = None
    total_progress: StrictInt | None = None


class Migration(CloudApiModel):
    machine: StrictStr | None = None
    automatic: StrictBool | None = None
    created_at: StrictStr | None = None
    scheduled_at: StrictStr | None = None
    phase: StrictStr | None = None
    state: StrictStr | None = None
    error: StrictStr | None = None
    progress: list[MigrationProgress] | None = None


# Networking and firewall


class FirewallRule(CloudApiModel):
    id: StrictStr | None = None
    enabled: StrictBool | None = None
    # "global" is a Python keyword
    global_: StrictBool | None = Field(default=None, alias="global")
    rule: StrictStr | None = None
    description: StrictStr | None = None


class VLAN(CloudApiModel):
    name: StrictStr | None = None
    vlan_id: StrictInt | None = None
    description: StrictStr | None = None


class Network(CloudApiModel):
    id: StrictStr | None = None
    name: StrictStr | None = None
    description: StrictStr | None = None
    public: StrictBool | None = None
    fabric: StrictBool | None = None
    subnet: StrictStr | None = None
    provision_start_ip: StrictStr | None = None
    provision_end_ip: StrictStr | None = None
    gateway: StrictStr | None = None
    resolvers: list[StrictStr] | None = None
    internet_nat: StrictBool | None = None


class NetworkIP(CloudApiModel):
    ip: StrictStr | None = None
    reserved: StrictBool | None = None
    managed: StrictBool | None = None
    owner_uuid: StrictStr | None = None
    belongs_to_uuid: StrictStr | None = None
    belongs_to_type: StrictStr | None = None


class NIC(CloudApiModel):
    ip: StrictStr | None = None
    mac: StrictStr | None = None
    primary: StrictBool | None = None
    netmask: StrictStr | None = None
    gateway: StrictStr | None = None
    state: StrictStr | None = None
    network: StrictStr | None = None


# Volumes


class Volume(CloudApiModel):
    id: StrictStr | None = None
    owner_uuid: StrictStr | None = None
    name: StrictStr | None = None
    type: StrictStr | None = None
    size: StrictInt | None = None
    created_at: StrictStr | None = None
    state: StrictStr | None = None
    filesystem_path: StrictStr | None = None
    networks: list[StrictStr] | None = None
    refs: list[StrictStr] | None = None
