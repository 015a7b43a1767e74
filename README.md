# idnpatch

`idnpatch` compares a *modified* and a *current* version of an
identity-management object and produces the JSON Patch operations
(`add`, `replace`, `remove`) that turn the current version into the
modified one.

It has no runtime dependencies.

## Installation

```
pip install idnpatch
```

## Supported objects

Each dataclass model in `idnpatch.models` has a patch builder in
`idnpatch.builders`:

| Model                   | Builder                       |
|-------------------------|-------------------------------|
| `IdentityProfile`       | `IdentityProfilePatchBuilder` |
| `LifecycleState`        | `LifecycleStatePatchBuilder`  |
| `OrgConfig`             | `OrgConfigPatchBuilder`       |
| `Role`                  | `RolePatchBuilder`            |
| `Source`                | `SourcePatchBuilder`          |
| `CreateWorkflowRequest` | `WorkflowPatchBuilder`        |

Each builder takes `(modified, current)`.

## Usage

```python
from idnpatch.models import OrgConfig
from idnpatch.builders import OrgConfigPatchBuilder

modified = OrgConfig(time_zone="UTC")
current = OrgConfig(time_zone="Europe/Zurich")

operations = OrgConfigPatchBuilder(modified, current).generate_json_patch()
for op in operations:
    print(op.to_dict())
# {'op': 'replace', 'path': '/timeZone', 'value': 'UTC'}
```

`generate_json_patch()` returns a list of `PatchOperation` objects
(`op`, `path`, `value`). The `value` is a `PatchValue` with at most one of
`string`, `int32`, `boolean`, `mapping` or `array` set; `to_dict()` gives
the operation as a JSON-ready dictionary.

## Comparison rules

- A value that is `None` in the modified object but set in the current
  one is removed; one that is set only in the modified object is added.
- Strings and numbers: a value that becomes `""` or `0` is removed, one
  that was `""` or `0` is added, any other change is replaced.
- Booleans that differ are always replaced.
- Dictionaries are compared key by key: keys missing from the modified
  dictionary are removed, new keys are added, and shared keys are
  compared recursively under `<path>/<key>`.
- Dataclasses are compared field by field under the JSON names given
  with `json_field`.
- Lists that differ are replaced as a whole. For list fields (and
  `ComparableValue` entries with `sequence=True`) a `None` counts as an
  empty list, so clearing such a list replaces it with `[]`.
- `Nullable` values are compared through what they hold.
- References such as owners, clusters and rules are compared only by
  their `id`. A reference that appears is added whole, one that
  disappears is removed, and a changed `id` replaces only
  `<path>/id`.
- Integers are sent as 32-bit values; floats are sent as strings
  (for example `12.2` becomes `"12.2"`), because the patch value has no
  float form.
- For workflows, the trigger's `id`, `filter.$`, `description`, `name`
  and `cronString` attributes are also compared under
  `/trigger/attributes/...` when the modified workflow has a trigger.

When two values of different kinds meet at the same path, or a value
cannot be represented in a patch, `idnpatch.builder.PatchError` (a
`ValueError`) is raised.

## Converting for the v3 API

`PatchOperation` objects use the beta API's value shape.
`idnpatch.operations.convert_to_v3` turns them into `V3PatchOperation`
objects with `V3PatchValue` values:

```python
from idnpatch.operations import convert_to_v3

v3_operations = convert_to_v3(operations)
```

## Writing your own builder

`idnpatch.builder.PatchBuilder` can be used directly by passing lists of
`ComparableValue(modified, current, path)` entries:

```python
from idnpatch.builder import ComparableValue, PatchBuilder

builder = PatchBuilder(values=[ComparableValue("new", "old", "/name")])
builder.generate_json_patch()
```

For a builder bound to a model, subclass `PatchBuilder` and override
`define_values_to_compare` so that it sets `self.values_to_compare`
(compared in depth) and `self.references_to_compare` (compared by
`id`). Declare the model's dataclass fields with
`idnpatch.builder.json_field(name, ...)`, which accepts the usual
`dataclasses.field` arguments plus `sequence=True` to mark a field as a
list, and wrap nullable fields in `idnpatch.builder.Nullable`.
`idnpatch.builder.to_operation_value(value, path)` wraps a single Python
value as a `PatchValue`.

## What it does not do

`idnpatch` only builds patch operations. It does not fetch objects,
send requests to any API, or apply patches to documents.