"""MCP bridge exposing Perplexity chat completions with prompt templates."""
