"""Review lifecycle: stores, transitions, feed, bulk actions and exports."""
