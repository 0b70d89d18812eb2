"""Front ends that drive an editing session."""
