#!/usr/bin/env python3
"""
Log Pipeline example

Shows a filter chain, a conversion pattern with stack trace detail, and a
security context provider installed by a startup hook.
"""

from log_pipeline import (
    DefaultConfiguratorHook,
    FilterConfig,
    LevelRangeFilter,
    PipelineConfig,
    SecurityContextProvider,
    SecurityContextProviderHook,
    StringMatchFilter,
    configure,
    declare_hook,
    get_logger,
    log_with_context,
    register_provider,
)


class AuditedProvider(SecurityContextProvider):
    """Stand-in for a provider that switches identity around output"""

    pass


def setup():
    register_provider("audited", AuditedProvider)

    config = PipelineConfig(
        conversion_pattern="%date{ABSOLUTE} %-5level %logger{1} [%stacktracedetail{2}] %message",
        filter_config=FilterConfig(
            filters=[
                StringMatchFilter(string_to_match="healthcheck", accept_on_match=False),
                LevelRangeFilter(min_level="INFO"),
            ]
        ),
    )
    declare_hook(__name__, DefaultConfiguratorHook(config))
    declare_hook(__name__, SecurityContextProviderHook("audited"))
    configure(__name__, get_logger("examples.orders", config))


class OrderService:
    def place(self, order_id, quantity=1):
        logger = get_logger("examples.orders")
        logger.info("placing order %s", order_id)
        logger.info("healthcheck ok")
        logger.debug("not shown")


def main():
    setup()
    OrderService().place(1001, quantity=3)

    logger = get_logger("examples.orders")
    emitted = log_with_context(logger, "warning", "low stock", sku="A-17")
    print(f"low stock warning emitted: {emitted}")


if __name__ == "__main__":
    main()
