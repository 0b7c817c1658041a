"""Terminal front-ends for table views."""
