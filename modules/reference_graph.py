"""
Reference module graph.

Four modules wired the way a small application usually is:
Module1 -> Module2 -> {Module3, Module4}, Module4 -> Module3.

Running ``module-topology resolve modules`` prints::

    Module3
    Module4
    Module2
    Module1
"""

from module_topology import AppModule, ServiceLifetime, depends_on


class Settings:
    def __init__(self, values):
        self.values = dict(values)


class Repository:
    def __init__(self):
        self.items = []


class Module1Service:
    pass


@depends_on("Module2")
class Module1(AppModule):
    def configure_services(self, context):
        context.services.register(Module1Service, Module1Service, ServiceLifetime.TRANSIENT)


@depends_on("Module3", "Module4")
class Module2(AppModule):
    def configure_services(self, context):
        repository = context.services.resolve(Repository)
        context.services.register("module2.repository_size", lambda: len(repository.items))


class Module3(AppModule):
    def configure_services(self, context):
        settings = Settings(context.module_config("Module3"))
        context.services.register_instance(Settings, settings)


@depends_on(Module3)
class Module4(AppModule):
    def configure_services(self, context):
        # Settings come from Module3, which is always configured first.
        context.services.resolve(Settings)
        context.services.register(Repository, Repository)
