"""Qt front-end for table views."""
