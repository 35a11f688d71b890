class DevshellError(Exception):
    pass


class UnresolvablePackageError(DevshellError, LookupError):
    def __init__(self, name):
        super().__init__(f"unresolvable package: {name}")
        self.name = name


class DescriptorError(DevshellError, ValueError):
    pass
