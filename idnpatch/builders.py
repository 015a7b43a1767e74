"""Patch builders for the individual object types."""

from __future__ import annotations

from .builder import ComparableValue, PatchBuilder
from .models import (
    CreateWorkflowRequest,
    IdentityProfile,
    LifecycleState,
    OrgConfig,
    Role,
    Source,
)


class IdentityProfilePatchBuilder(PatchBuilder):
    """Builds the patch between two identity profiles."""

    def __init__(self, modified: IdentityProfile, current: IdentityProfile):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        m, c = self.modified, self.current
        self.values_to_compare = [
            ComparableValue(m.name, c.name, "/name"),
            ComparableValue(m.description.get(), c.description.get(), "/description"),
            ComparableValue(m.priority, c.priority, "/priority"),
            ComparableValue(m.identity_refresh_required, c.identity_refresh_required, "/identityRefreshRequired"),
            ComparableValue(m.has_time_based_attr, c.has_time_based_attr, "/hasTimeBasedAttr"),
            ComparableValue(m.identity_attribute_config, c.identity_attribute_config, "/identityAttributeConfig"),
        ]
        self.references_to_compare = [
            ComparableValue(m.owner, c.owner, "/owner"),
            ComparableValue(m.authoritative_source, c.authoritative_source, "/authoritativeSource"),
        ]


class LifecycleStatePatchBuilder(PatchBuilder):
    """Builds the patch between two lifecycle states."""

    def __init__(self, modified: LifecycleState, current: LifecycleState):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        m, c = self.modified, self.current
        self.values_to_compare = [
            ComparableValue(m.name, c.name, "/name"),
            ComparableValue(m.enabled, c.enabled, "/enabled"),
            ComparableValue(m.technical_name, c.technical_name, "/technicalName"),
            ComparableValue(m.description, c.description, "/description"),
            ComparableValue(m.email_notification_option, c.email_notification_option, "/emailNotificationOption"),
            ComparableValue(m.account_actions, c.account_actions, "/accountActions", sequence=True),
            ComparableValue(m.access_profile_ids, c.access_profile_ids, "/accessProfileIds", sequence=True),
            ComparableValue(m.identity_state, c.identity_state, "/identityState"),
        ]
        self.references_to_compare = []


class OrgConfigPatchBuilder(PatchBuilder):
    """Builds the patch between two organisation configurations."""

    def __init__(self, modified: OrgConfig, current: OrgConfig):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        self.values_to_compare = [
            ComparableValue(self.modified.time_zone, self.current.time_zone, "/timeZone"),
        ]
        self.references_to_compare = []


class RolePatchBuilder(PatchBuilder):
    """Builds the patch between two roles."""

    def __init__(self, modified: Role, current: Role):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        m, c = self.modified, self.current
        self.values_to_compare = [
            ComparableValue(m.name, c.name, "/name"),
            ComparableValue(m.description.get(), c.description.get(), "/description"),
            ComparableValue(m.access_profiles, c.access_profiles, "/accessProfiles", sequence=True),
            ComparableValue(m.entitlements, c.entitlements, "/entitlements", sequence=True),
            ComparableValue(m.membership.get(), c.membership.get(), "/membership"),
            ComparableValue(m.enabled, c.enabled, "/enabled"),
            ComparableValue(m.requestable, c.requestable, "/requestable"),
            ComparableValue(m.access_request_config, c.access_request_config, "/accessRequestConfig"),
            ComparableValue(m.revocation_request_config, c.revocation_request_config, "/revocationRequestConfig"),
            ComparableValue(m.segments, c.segments, "/segments", sequence=True),
        ]
        self.references_to_compare = [ComparableValue(m.owner, c.owner, "/owner")]


class SourcePatchBuilder(PatchBuilder):
    """Builds the patch between two sources."""

    def __init__(self, modified: Source, current: Source):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        m, c = self.modified, self.current
        self.values_to_compare = [
            ComparableValue(m.name, c.name, "/name"),
            ComparableValue(m.description, c.description, "/description"),
            ComparableValue(m.features, c.features, "/features", sequence=True),
            ComparableValue(m.connector_attributes, c.connector_attributes, "/connectorAttributes"),
            ComparableValue(m.delete_threshold, c.delete_threshold, "/deleteThreshold"),
            ComparableValue(m.manager_correlation_mapping, c.manager_correlation_mapping, "/managerCorrelationMapping"),
        ]
        self.references_to_compare = [
            ComparableValue(m.owner, c.owner, "/owner"),
            ComparableValue(m.cluster, c.cluster, "/cluster"),
            ComparableValue(m.account_correlation_config, c.account_correlation_config, "/accountCorrelationConfig"),
            ComparableValue(m.account_correlation_rule, c.account_correlation_rule, "/accountCorrelationRule"),
            ComparableValue(m.manager_correlation_rule, c.manager_correlation_rule, "/managerCorrelationRule"),
            ComparableValue(m.before_provisioning_rule, c.before_provisioning_rule, "/beforeProvisioningRule"),
            ComparableValue(m.management_workgroup, c.management_workgroup, "/managementWorkgroup"),
        ]


def _trigger_name(request: CreateWorkflowRequest) -> str:
    trigger = request.trigger
    if trigger is not None and trigger.type == "EXTERNAL":
        external = trigger.get_attributes().external
        if external is not None and external.name is not None:
            return external.name
    return ""


def _trigger_description(request: CreateWorkflowRequest) -> str:
    trigger = request.trigger
    if trigger is None:
        return ""
    attributes = trigger.get_attributes()
    if trigger.type == "EVENT" and attributes.event is not None and attributes.event.description is not None:
        return attributes.event.description
    if (
        trigger.type == "EXTERNAL"
        and attributes.external is not None
        and attributes.external.description is not None
    ):
        return attributes.external.description
    return ""


def _trigger_cron_string(request: CreateWorkflowRequest) -> str:
    trigger = request.trigger
    if trigger is not None:
        scheduled = trigger.get_attributes().scheduled
        if scheduled is not None and scheduled.cron_string is not None:
            return scheduled.cron_string
    return ""


def _trigger_id(request: CreateWorkflowRequest) -> str:
    trigger = request.trigger
    if trigger is not None and trigger.type == "EVENT":
        event = trigger.get_attributes().event
        if event is not None:
            return event.id
    return ""


def _trigger_filter(request: CreateWorkflowRequest) -> str:
    trigger = request.trigger
    if trigger is not None and trigger.type == "EVENT":
        event = trigger.get_attributes().event
        if event is not None and event.filter is not None:
            return event.filter
    return ""


class WorkflowPatchBuilder(PatchBuilder):
    """Builds the patch between two workflows."""

    def __init__(self, modified: CreateWorkflowRequest, current: CreateWorkflowRequest):
        super().__init__()
        self.modified = modified
        self.current = current

    def define_values_to_compare(self) -> None:
        m, c = self.modified, self.current
        values = [
            ComparableValue(m.name, c.name, "/name"),
            ComparableValue(m.description, c.description, "/description"),
            ComparableValue(m.enabled, c.enabled, "/enabled"),
            ComparableValue(m.definition, c.definition, "/definition"),
            ComparableValue(m.trigger, c.trigger, "/trigger"),
        ]
        if m.trigger is not None:
            values += [
                ComparableValue(_trigger_id(m), _trigger_id(c), "/trigger/attributes/id"),
                ComparableValue(_trigger_filter(m), _trigger_filter(c), "/trigger/attributes/filter.$"),
                ComparableValue(_trigger_description(m), _trigger_description(c), "/trigger/attributes/description"),
                ComparableValue(_trigger_name(m), _trigger_name(c), "/trigger/attributes/name"),
                ComparableValue(_trigger_cron_string(m), _trigger_cron_string(c), "/trigger/attributes/cronString"),
            ]
        self.values_to_compare = values
        self.references_to_compare = []