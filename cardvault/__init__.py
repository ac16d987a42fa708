"""CardVault: collectible card collection tracker."""
