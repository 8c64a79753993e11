"""Infrastructure modules of the localized content API.

- configuration: Settings management (settings, Settings)
- logging: Structured logging and request context
- i18n: Locale negotiation, locale registry and message catalogs
- operations: Results of side-effect operations
- persistence: Document store, localization service and file store contracts
- notifications: Email and PDF rendering
- services: Dependency injection providers (SettingsDep, get_settings, ...)
- auth: Bearer token validation and role checks
"""
