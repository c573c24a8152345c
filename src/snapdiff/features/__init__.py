"""Feature packages: stylesheets, assets, snapshots, watch."""
