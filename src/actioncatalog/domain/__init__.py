"""Domain layer: catalog model, reconciliation and discovery."""
