"""vault_chooser package: navigation and target selection for opening or creating vaults.

Subpackages are imported directly (entities, ports, adapters, use_cases, api).
"""

__all__: list[str] = []
