"""Data models of the objects that patches are generated for."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .builder import Nullable, json_field


@dataclass
class Reference:
    """A reference to another object, identified by its id."""

    id: str | None = json_field("id", default=None)
    name: str | None = json_field("name", default=None)
    type: str | None = json_field("type", default=None)


@dataclass
class TransformDefinition:
    """A transform applied to an identity attribute."""

    type: str | None = json_field("type", default=None)
    attributes: dict[str, Any] | None = json_field("attributes", default=None)


@dataclass
class IdentityAttributeTransform:
    """Maps an identity attribute to its transform."""

    identity_attribute_name: str | None = json_field("identityAttributeName", default=None)
    transform_definition: TransformDefinition | None = json_field("transformDefinition", default=None)


@dataclass
class IdentityAttributeConfig:
    """Identity attribute configuration of an identity profile."""

    enabled: bool | None = json_field("enabled", default=None)
    attribute_transforms: list[IdentityAttributeTransform] | None = json_field(
        "attributeTransforms", default=None
    )


@dataclass
class IdentityProfile:
    """An identity profile."""

    name: str = json_field("name", default="")
    description: Nullable = json_field("description", default_factory=Nullable)
    owner: Nullable = json_field("owner", default_factory=Nullable)
    priority: int | None = json_field("priority", default=None)
    authoritative_source: Reference = json_field("authoritativeSource", default_factory=Reference)
    identity_refresh_required: bool | None = json_field("identityRefreshRequired", default=None)
    has_time_based_attr: bool | None = json_field("hasTimeBasedAttr", default=None)
    identity_attribute_config: IdentityAttributeConfig | None = json_field(
        "identityAttributeConfig", default=None
    )


@dataclass
class EmailNotificationOption:
    """Who is notified when a lifecycle state is entered."""

    notify_managers: bool | None = json_field("notifyManagers", default=None)
    notify_all_admins: bool | None = json_field("notifyAllAdmins", default=None)
    notify_specific_users: bool | None = json_field("notifySpecificUsers", default=None)
    email_address_list: list[str] | None = json_field("emailAddressList", default=None)


@dataclass
class AccountAction:
    """An action taken on accounts of the given sources."""

    action: str | None = json_field("action", default=None)
    source_ids: list[str] | None = json_field("sourceIds", default=None)


@dataclass
class LifecycleState:
    """A lifecycle state of an identity profile."""

    name: str = json_field("name", default="")
    technical_name: str = json_field("technicalName", default="")
    enabled: bool | None = json_field("enabled", default=None)
    description: str | None = json_field("description", default=None)
    email_notification_option: EmailNotificationOption | None = json_field(
        "emailNotificationOption", default=None
    )
    account_actions: list[AccountAction] | None = json_field("accountActions", default=None)
    access_profile_ids: list[str] | None = json_field("accessProfileIds", default=None)
    identity_state: Nullable = json_field("identityState", default_factory=Nullable)


@dataclass
class OrgConfig:
    """Organisation-wide configuration."""

    time_zone: str | None = json_field("timeZone", default=None)


@dataclass
class Role:
    """A role."""

    name: str = json_field("name", default="")
    description: Nullable = json_field("description", default_factory=Nullable)
    owner: Reference = json_field("owner", default_factory=Reference)
    access_profiles: list[Reference] | None = json_field("accessProfiles", default=None)
    entitlements: list[Reference] | None = json_field("entitlements", default=None)
    membership: Nullable = json_field("membership", default_factory=Nullable)
    enabled: bool | None = json_field("enabled", default=None)
    requestable: bool | None = json_field("requestable", default=None)
    access_request_config: dict[str, Any] | None = json_field("accessRequestConfig", default=None)
    revocation_request_config: dict[str, Any] | None = json_field(
        "revocationRequestConfig", default=None
    )
    segments: list[str] | None = json_field("segments", default=None)


@dataclass
class SourceCluster:
    """The cluster a source runs on."""

    type: str = json_field("type", default="")
    id: str = json_field("id", default="")
    name: str = json_field("name", default="")


@dataclass
class ManagerCorrelationMapping:
    """How accounts are correlated with their managers."""

    account_attribute_name: str | None = json_field("accountAttributeName", default=None)
    identity_attribute_name: str | None = json_field("identityAttributeName", default=None)


@dataclass
class Source:
    """A source of accounts."""

    name: str = json_field("name", default="")
    description: str | None = json_field("description", default=None)
    owner: Reference = json_field("owner", default_factory=Reference)
    cluster: Nullable = json_field("cluster", default_factory=Nullable)
    account_correlation_config: Nullable = json_field("accountCorrelationConfig", default_factory=Nullable)
    account_correlation_rule: Nullable = json_field("accountCorrelationRule", default_factory=Nullable)
    manager_correlation_mapping: ManagerCorrelationMapping | None = json_field(
        "managerCorrelationMapping", default=None
    )
    manager_correlation_rule: Nullable = json_field("managerCorrelationRule", default_factory=Nullable)
    before_provisioning_rule: Nullable = json_field("beforeProvisioningRule", default_factory=Nullable)
    management_workgroup: Nullable = json_field("managementWorkgroup", default_factory=Nullable)
    features: list[str] | None = json_field("features", default=None)
    connector_attributes: dict[str, Any] | None = json_field("connectorAttributes", default=None)
    delete_threshold: int | None = json_field("deleteThreshold", default=None)


@dataclass
class EventAttributes:
    """Attributes of an event trigger."""

    id: str = json_field("id", default="")
    filter: str | None = json_field("filter.$", default=None)
    description: str | None = json_field("description", default=None)


@dataclass
class ExternalAttributes:
    """Attributes of an external trigger."""

    name: str | None = json_field("name", default=None)
    description: str | None = json_field("description", default=None)


@dataclass
class ScheduledAttributes:
    """Attributes of a scheduled trigger."""

    cron_string: str | None = json_field("cronString", default=None)


@dataclass
class TriggerAttributes:
    """One-of holder for the attributes of a workflow trigger."""

    event: EventAttributes | None = None
    external: ExternalAttributes | None = None
    scheduled: ScheduledAttributes | None = None


@dataclass
class WorkflowTrigger:
    """What starts a workflow."""

    type: str = json_field("type", default="")
    attributes: TriggerAttributes | None = json_field("attributes", default=None)

    def get_attributes(self) -> TriggerAttributes:
        """Return the attributes, or empty ones when none are set."""
        return self.attributes if self.attributes is not None else TriggerAttributes()


@dataclass
class WorkflowDefinition:
    """The steps of a workflow."""

    start: str | None = json_field("start", default=None)
    steps: dict[str, Any] | None = json_field("steps", default=None)


@dataclass
class CreateWorkflowRequest:
    """A workflow as it is created or updated."""

    name: str = json_field("name", default="")
    owner: Reference = json_field("owner", default_factory=Reference)
    description: str | None = json_field("description", default=None)
    definition: WorkflowDefinition | None = json_field("definition", default=None)
    enabled: bool | None = json_field("enabled", default=None)
    trigger: WorkflowTrigger | None = json_field("trigger", default=None)