"""HTTP backend for the smart-deals marketplace: products, bids and bearer-token auth."""
