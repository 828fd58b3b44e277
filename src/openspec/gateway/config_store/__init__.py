"""Global config persistence gateway."""

from openspec.gateway.config_store.abc import ConfigStore as ConfigStore
from openspec.gateway.config_store.fake import FakeConfigStore as FakeConfigStore
from openspec.gateway.config_store.real import RealConfigStore as RealConfigStore
