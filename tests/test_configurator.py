"""
Tests for priority ordered configuration hooks
"""

import io
import logging

from log_pipeline.config import PipelineConfig
from log_pipeline.configurator import (
    DEFAULT_CONFIGURATOR_PRIORITY,
    SECURITY_PROVIDER_PRIORITY,
    ConfigurationContext,
    ConfiguratorHook,
    DefaultConfiguratorHook,
    ProviderRegistry,
    SecurityContextProviderHook,
    configure,
    declare_hook,
    get_declared_hooks,
    get_default_context,
    run_configurators,
)
from log_pipeline.diagnostics import InternalLog
from log_pipeline.handlers import PipelineHandler
from log_pipeline.security import SecurityContext, SecurityContextProvider


class RecordingContext(SecurityContext):
    def __init__(self, calls):
        self.calls = calls

    def impersonate(self, state=None):
        self.calls.append("enter")
        return super().impersonate(state)


class RecordingProvider(SecurityContextProvider):
    calls = []

    def create_security_context(self, consumer):
        return RecordingContext(self.calls)


class BrokenProvider(SecurityContextProvider):
    def __init__(self):
        raise RuntimeError("no credentials")


class NotAProvider:
    pass


def errors(entries):
    return [e for e in entries if e.levelname == "ERROR"]


def make_order_hooks(calls):
    class FirstHook(ConfiguratorHook):
        def configure(self, source, repository, context):
            calls.append(self.priority)

    class SecondHook(ConfiguratorHook):
        def configure(self, source, repository, context):
            calls.append(self.priority)

    return FirstHook(50), SecondHook(100)


class TestSecurityContextProviderHook:
    def setup_method(self):
        self.context = ConfigurationContext(registry=ProviderRegistry())
        self.default_provider = self.context.security_provider

    def test_priority_runs_before_default_configurator(self):
        hook = SecurityContextProviderHook(RecordingProvider)
        assert hook.priority == SECURITY_PROVIDER_PRIORITY
        assert hook.priority < DEFAULT_CONFIGURATOR_PRIORITY

    def test_installs_provider_from_class(self):
        hook = SecurityContextProviderHook(RecordingProvider)
        hook.configure("myapp", None, self.context)
        assert isinstance(self.context.security_provider, RecordingProvider)

    def test_installs_provider_from_registry(self):
        self.context.registry.register("recording", RecordingProvider)
        SecurityContextProviderHook("recording").configure("myapp", None, self.context)
        assert isinstance(self.context.security_provider, RecordingProvider)

    def test_replaces_prior_provider(self):
        first = SecurityContextProvider()
        self.context.security_provider = first
        SecurityContextProviderHook(RecordingProvider).configure(
            "myapp", None, self.context
        )
        assert self.context.security_provider is not first

    def test_null_provider_type(self):
        with InternalLog.capture() as entries:
            SecurityContextProviderHook(None).configure("myapp", None, self.context)

        assert self.context.security_provider is self.default_provider
        assert len(errors(entries)) == 1
        assert "myapp" in errors(entries)[0].message

    def test_construction_failure(self):
        with InternalLog.capture() as entries:
            SecurityContextProviderHook(BrokenProvider).configure(
                "myapp", None, self.context
            )

        assert self.context.security_provider is self.default_provider
        assert len(errors(entries)) == 1
        assert "BrokenProvider" in errors(entries)[0].message
        assert isinstance(errors(entries)[0].exception, RuntimeError)

    def test_incompatible_instance(self):
        with InternalLog.capture() as entries:
            SecurityContextProviderHook(NotAProvider).configure(
                "myapp", None, self.context
            )

        assert self.context.security_provider is self.default_provider
        assert len(errors(entries)) == 1

    def test_unregistered_name(self):
        with InternalLog.capture() as entries:
            SecurityContextProviderHook("missing").configure("myapp", None, self.context)

        assert self.context.security_provider is self.default_provider
        assert "missing" in errors(entries)[0].message


class TestRunConfigurators:
    def test_ascending_priority_regardless_of_declaration_order(self):
        calls = []
        first, second = make_order_hooks(calls)

        run_configurators("myapp", None, [second, first], ConfigurationContext())
        assert calls == [50, 100]

    def test_same_hook_kind_only_applied_once(self):
        context = ConfigurationContext()
        providers = []

        class CountingHook(ConfiguratorHook):
            def configure(self, source, repository, context):
                providers.append(source)

        with InternalLog.capture() as entries:
            applied = run_configurators(
                "myapp", None, [CountingHook(10), CountingHook(20)], context
            )
            run_configurators("myapp", None, [CountingHook(10)], context)

        assert providers == ["myapp"]
        assert len(applied) == 1
        assert len(errors(entries)) == 2

    def test_failing_hook_does_not_stop_the_rest(self):
        calls = []

        class FailingHook(ConfiguratorHook):
            def configure(self, source, repository, context):
                raise RuntimeError("broken")

        first, second = make_order_hooks(calls)
        with InternalLog.capture() as entries:
            run_configurators(
                "myapp", None, [FailingHook(75), second, first], ConfigurationContext()
            )

        assert calls == [50, 100]
        assert len(errors(entries)) == 1

    def test_uses_default_context(self):
        run_configurators("myapp", None, [SecurityContextProviderHook(RecordingProvider)])
        assert isinstance(get_default_context().security_provider, RecordingProvider)


class TestDeclaredHooks:
    def test_duplicate_declaration_rejected(self):
        declare_hook("myapp", SecurityContextProviderHook(RecordingProvider))
        with InternalLog.capture() as entries:
            declare_hook("myapp", SecurityContextProviderHook(BrokenProvider))

        assert len(get_declared_hooks("myapp")) == 1
        assert len(errors(entries)) == 1

    def test_provider_in_place_before_default_configuration(self):
        RecordingProvider.calls = []
        stream = io.StringIO()
        logger = logging.getLogger("test_configurator.wired")
        logger.propagate = False

        declare_hook("myapp", DefaultConfiguratorHook(PipelineConfig(conversion_pattern="%m")))
        declare_hook("myapp", SecurityContextProviderHook(RecordingProvider))
        configure("myapp", logger)

        handler = next(h for h in logger.handlers if isinstance(h, PipelineHandler))
        handler.setStream(stream)
        try:
            logger.info("secured")
        finally:
            logger.removeHandler(handler)

        assert stream.getvalue() == "secured\n"
        assert RecordingProvider.calls == ["enter"]
