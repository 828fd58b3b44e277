"""Interactive prompt gateway."""

from openspec.gateway.console.abc import Console as Console
from openspec.gateway.console.fake import FakeConsole as FakeConsole
from openspec.gateway.console.real import RealConsole as RealConsole
