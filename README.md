# csiaddons

Building blocks for a CSI-Addons sidecar. A sidecar runs next to a CSI
driver. It checks that the driver is ready and builds the CSIAddonsNode
object that tells the controller where to reach it. It also serves
CSI-Addons requests over gRPC.

The package has one runtime dependency, `grpcio`.

## Modules

### `csiaddons.config`

- `Config` is a dataclass with the following fields and defaults:
  - `namespace`: `"csi-addons-system"`
  - `reclaim_space_timeout`: `timedelta(minutes=3)`
  - `max_concurrent_reconciles`: `100`
- `Config.read_config(data_map)` applies two keys:
  - `reclaim-space-timeout` takes a duration such as `10m` or `1h30m`.
  - `max-concurrent-reconciles` takes an integer.

  An unknown key or a value that cannot be parsed raises `ConfigError`. `None`
  or an empty mapping changes nothing.
- `Config.read_config_map(fetch)` calls `fetch(namespace, "csi-addons-config")`
  and applies the mapping it returns:
  - If `fetch` returns `None`, the ConfigMap is missing and nothing changes.
  - If `fetch` raises an exception, it is wrapped in `ConfigError`.
- `parse_duration(value)` turns a duration string into a
  `datetime.timedelta`:
  - The units are `ns`, `us`, `µs`, `ms`, `s`, `m` and `h`.
  - A value may have a sign, fractions, and several parts.

### `csiaddons.errors`

- `StatusError(code, details)` is a `grpc.RpcError` that carries a
  `grpc.StatusCode` and a message.
- `get_error_message(err)` returns the status message of a gRPC error. For
  any other exception it returns `str(err)`, and for `None` it returns `""`.
- `is_unimplemented_error(err)` is true only for a gRPC `UNIMPLEMENTED`
  status.

### `csiaddons.names`

- `normalize_lease_name(name)` replaces every character outside
  `[a-zA-Z0-9-]` with `-`. If the result ends with `-`, it appends `X`.
  Empty names are rejected with `ValueError`.
- `remove_from_list(items, value)` returns a new list without any occurrence
  of `value`.

### `csiaddons.endpoint`

- `validate_controller_endpoint(raw_ip, raw_port)` returns `ip:port`. IPv6
  addresses are returned in brackets.
- `build_endpoint_url(raw_ip, raw_port, pod, namespace)` returns one of two
  forms:
  - With an IP address, it returns the same result as
    `validate_controller_endpoint`.
  - Without one, it returns `pod://<pod>[.<namespace>]:<port>`.
- Bad addresses, bad ports (anything that is not 0–65535) and missing
  information raise `InvalidEndpointError`.

### `csiaddons.client`

- `DriverClient` is the abstract interface the sidecar needs. It has three
  methods: `probe()`, `get_driver_name()` and `has_controller_service()`.
- `IdentityClient(stub, timeout, *, channel=None, probe_interval=1.0, sleep=time.sleep)`
  implements it on top of an object that follows the `IdentityStub`
  protocol:
  - `probe()` retries every `probe_interval` seconds while the driver is not
    ready or while the call fails with `DEADLINE_EXCEEDED`. Any other
    failure raises `ProbeError`. An absent ready flag (`None`) counts as
    ready.
  - `get_driver_name()` raises `DriverError` for an empty name.
  - `has_controller_service()` raises `DriverError` when there are no
    capabilities. Otherwise it reports whether any of them is
    `"CONTROLLER_SERVICE"`.

### `csiaddons.node`

- `Manager` holds the following:
  - the driver client
  - node ID
  - endpoint
  - Pod name, namespace and UID
  - retry interval (5 minutes) and timeout (3 minutes)
- `Manager.build_node()` returns the CSIAddonsNode object as a dict. The
  object contains:
  - metadata with an owner reference to the Pod
  - `spec.driver` with `name`, `endpoint` and `nodeID`

  Missing information or an empty driver name raises `InvalidConfigError`.
- `Manager.deploy(create)` builds the object and passes it to `create`:
  - A `create` function that raises `AlreadyExistsError` counts as success.
  - Other errors are logged and retried until the timeout runs out. After
    that, `TimeoutError` is raised.

### `csiaddons.server`

- `SidecarServer(ip, port, *, grace=30.0)` listens on `ip:port`. An empty IP
  address means all addresses.
- `register_service(service)` adds an object with a
  `register_service(server)` method.
- `start()` creates the gRPC server and registers the services. It then
  serves until the server is stopped, so call it in a thread if you need to
  go on. It raises `RuntimeError` if it cannot listen.
- `wait_started(timeout)` waits until the server is listening.
  `bound_port` holds the port that was bound.
- `stop()` stops the server. Pending requests get `grace` seconds to finish.

### `csiaddons.version`

- `version_lines()` returns the following lines:
  - version
  - git commit
  - Python version
  - implementation
  - platform
- `print_version()` prints these lines.

## Examples

```python
from csiaddons.endpoint import build_endpoint_url, validate_controller_endpoint
from csiaddons.names import normalize_lease_name, remove_from_list

validate_controller_endpoint("192.168.61.228", "8080")
# '192.168.61.228:8080'

validate_controller_endpoint("2001:db8:3c4d:15:0:1:1a2f:1a2b", "8080")
# '[2001:db8:3c4d:15:0:1:1a2f:1a2b]:8080'

build_endpoint_url("", "8080", "my-pod", "my-namespace")
# 'pod://my-pod.my-namespace:8080'

normalize_lease_name("some.csi.driver...")
# 'some-csi-driver---X'

remove_from_list(["hello", "hi", "hey"], "hello")
# ['hi', 'hey']
```

To read configuration overrides:

```python
from datetime import timedelta
from csiaddons.config import Config, ConfigError

cfg = Config()
try:
    cfg.read_config({"reclaim-space-timeout": "10m", "max-concurrent-reconciles": "5"})
except ConfigError as exc:
    print(f"bad configuration: {exc}")

assert cfg.reclaim_space_timeout == timedelta(minutes=10)
assert cfg.max_concurrent_reconciles == 5
```

To talk to a driver and build its node object:

```python
from csiaddons.client import IdentityClient
from csiaddons.node import Manager

class Stub:
    def probe(self, timeout):
        return True

    def get_identity(self, timeout):
        return "csi.example.com"

    def get_capabilities(self, timeout):
        return ["CONTROLLER_SERVICE"]

client = IdentityClient(Stub(), timeout=180.0)
client.probe()
client.has_controller_service()   # True

manager = Manager(
    client=client,
    node="node-1",
    endpoint="pod://my-pod.my-namespace:9070",
    pod_name="my-pod",
    pod_namespace="my-namespace",
    pod_uid="uid-placeholder",
)
manager.build_node()["spec"]["driver"]["name"]   # 'csi.example.com'
```

## What the package does not do

- There is no command to run and no ready-made sidecar process. You wire
  the pieces together yourself.
- The package has no Kubernetes API client. `Config.read_config_map` takes
  a `fetch` callable and `Manager.deploy` takes a `create` callable, and both
  must be supplied by you.
- The package has no generated gRPC stubs for the Identity service, and none
  for the other CSI-Addons services. `IdentityClient` expects an object that
  follows the `IdentityStub` protocol. `SidecarServer` serves only the
  services you register.
- The package does no leader election.