"""Message catalogue compilation and runtime locale loading."""
