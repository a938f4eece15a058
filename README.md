# vmmonitor

`vmmonitor` holds the state behind a resource monitor that watches the host
machine and the virtual machines running on it. Each monitored machine is a
*client* with a numeric id; the host always has id `0`
(`vmmonitor.clientconfig.HOST_ID`). For every client the package keeps CPU,
memory, storage, network and process data, and a single "context" client
decides which of them the models currently expose.

The models offer rows, roles and change signals (`Signal` objects with
`connect`, `disconnect` and `emit`) so that a front end can draw from them.

## What is inside

- `vmmonitor.flowbuffer` – `Signal`, a minimal connect/emit helper, and
  `FlowBuffer`, a fixed-size ring buffer of samples. It starts zero-filled,
  reads oldest first, and emits `changed` on every `push`.
- `vmmonitor.clientconfig` – `Address`, `ClientConfiguration`,
  `ConnectionState`, `ConnectionStatus`, `UnknownClientError` and
  `ClientConfigModel`. `ClientConfigModel.save` writes a `client_config`
  XML element and `ClientConfigModel.load` reads one back, raising
  `ValueError` if its children are not `id`, `name`, `cid`, `port`.
- `vmmonitor.clientmapper` and `vmmonitor.clientdatacontainer` –
  `ContiguousClientMapper` and `ClientDataContainer`: per-client items kept
  contiguous in insertion order, addressable by position and by client id,
  with a context client that falls back to the host when removed.
- `vmmonitor.rangemodel` – `RangeModel` gauges from 0 to 100 that ignore
  out-of-range or unchanged values, with `CpuRangeModel`,
  `MemoryRangeModel` and `DiskRangeModel`.
- `vmmonitor.pagenavigator` – `PageNavigator`, which tracks the client in
  context and signals which page to show, and `MenubarModel`.
- `vmmonitor.lineargraph` – `LinearGraphDataModel`, a two-column table over a
  flow buffer of 20 samples (`new_graph_data()`), and
  `CoreLoadDataModelProvider`, one `CoreLoadDataModel` per CPU core.
- `vmmonitor.statusmodel` – `ClientStatusModel`, the list of clients with
  their latest CPU and memory load (`StatusEntry`).
- `vmmonitor.processes` – `ProcessEntry` and `ProcessIndexer`, a stable
  sorted view by any `ProcessField`, ascending or descending.
- `vmmonitor.processtable` – `ProcessTableModel`, the process table of the
  context client; `display_string` shortens text longer than 20 characters
  to 17 characters and `"..."`.
- `vmmonitor.cpuload`, `vmmonitor.storage`, `vmmonitor.network`,
  `vmmonitor.description` – per-client CPU histories (`CpuLoadDataModel`),
  storage devices (`StorageDataModel`), network interfaces with rx/tx
  histories (`NetworkInterfaceModel`) and the system description
  (`ClientDescriptionModel`).
- `vmmonitor.configlist` – `ClientConfigListModel`, the list of client
  configurations persisted to an XML file. An empty or missing file gets the
  host configuration, which is then saved.
- `vmmonitor.connector` – `ClientDispatcher`, `Connection` and
  `ClientConnector`, which waits for dispatchers to report in and reports
  those still pending as timed out after a timeout (0.1 s by default).
- `vmmonitor.viewcontroller`, `vmmonitor.controller` and
  `vmmonitor.application` – `ClientViewController` feeds one client's metrics
  into the models, `Controller` handles connect, disconnect and delete
  requests, and `Application` owns every model and wires them together.

## Examples

A sample history and a gauge:

```python
from vmmonitor.flowbuffer import FlowBuffer
from vmmonitor.rangemodel import CpuRangeModel

history = FlowBuffer(20)
history.push(12.5)
history.push(40.0)
recent = list(history)   # 20 samples, oldest first, newest last

gauge = CpuRangeModel()
gauge.value = 40.0       # values outside 0..100 are ignored
```

The whole application, with a dispatcher that reports in by hand:

```python
from types import SimpleNamespace

from vmmonitor.application import Application
from vmmonitor.connector import ClientDispatcher

dispatchers = []

def factory(config, is_local):
    dispatcher = ClientDispatcher(config)
    dispatchers.append(dispatcher)
    return dispatcher

app = Application("configs.xml", factory)   # reads or creates configs.xml
app.start_execution()                        # asks the factory for the host

system_info = SimpleNamespace(
    platform="Linux",
    distribution="Debian",
    cpu_info=SimpleNamespace(model="Example CPU", cores=4, speed="2.4 GHz"),
)
dispatchers[0].client_connected.emit(system_info)

app.status_model.row_count()    # 1
app.client_descriptor.name      # "Host"
```

Metric and system-information records are duck-typed; the docstrings of
`ClientViewController`, `StorageDataModel`, `NetworkInterfaceModel`,
`ClientDescriptionInfo` and `ProcessEntry.from_info` list the attributes
they read. Unknown client ids raise
`vmmonitor.clientconfig.UnknownClientError`.

## What the package does not do

- It does not talk to clients. There is no vsock transport and no local
  resource sampler: a `ClientDispatcher` only carries signals, and the
  dispatcher factory given to `Application` must supply dispatchers that
  emit `client_connected`, `runtime_metric_received` and `client_timed_out`.
- It has no user interface and no command-line program; it only holds the
  models a front end would display.
- Its only storage is the XML file of client configurations.

## Tests

The test suite uses pytest and lives in `tests/`:

```
pip install -e .[test]
pytest
```