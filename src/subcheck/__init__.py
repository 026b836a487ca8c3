"""subcheck - subscription checker configuration tooling."""
