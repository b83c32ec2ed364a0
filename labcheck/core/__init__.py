# Core package: configuration, errors, shared models and utilities
