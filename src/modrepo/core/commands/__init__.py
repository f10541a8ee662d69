"""Management commands operating on the module repository."""

from modrepo.core.commands.add_module import AddModule, AddModuleBuilder

__all__ = ["AddModule", "AddModuleBuilder"]
