"""gripx: composable read/write grips over sync and async state."""

from importlib.metadata import version as _version

__version__ = _version("gripx")

from gripx._mode import Sync, Async, classify, resolved, set_scheduler
from gripx.grip import (
    Grip,
    DelegatingGrip,
    ReadOnlyGrip,
    ObservableGrip,
    is_grip,
    is_observable,
    read_only_grip,
    observable_grip,
)
from gripx.value import ValueGrip, value_grip
from gripx.manual import ManualGrip, manual_grip
from gripx.prop import ObjectPropGrip, PropGrip, object_prop_grip, prop_grip
from gripx.caching import CachingGrip, caching_grip
from gripx.transform import TransformGrip, transform_grip
from gripx.fallback import WithFallbackGrip, with_fallback_grip
from gripx.guarded import (
    GuardedGrip,
    SyncGuardedGrip,
    AsyncGuardedGrip,
    guarded_grip,
    guarded_grip_sync,
    guarded_grip_async,
)
from gripx.as_async import AsyncGrip, as_async
# storage adapters NOT auto-imported — use gripx.storage

__all__ = [
    "Grip",
    "DelegatingGrip",
    "ReadOnlyGrip",
    "ObservableGrip",
    "is_grip",
    "is_observable",
    "read_only_grip",
    "observable_grip",
    "ValueGrip",
    "value_grip",
    "ManualGrip",
    "manual_grip",
    "ObjectPropGrip",
    "PropGrip",
    "object_prop_grip",
    "prop_grip",
    "CachingGrip",
    "caching_grip",
    "TransformGrip",
    "transform_grip",
    "WithFallbackGrip",
    "with_fallback_grip",
    "GuardedGrip",
    "SyncGuardedGrip",
    "AsyncGuardedGrip",
    "guarded_grip",
    "guarded_grip_sync",
    "guarded_grip_async",
    "AsyncGrip",
    "as_async",
    "Sync",
    "Async",
    "classify",
    "resolved",
    "set_scheduler",
]
