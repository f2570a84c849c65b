class DatagenError(Exception):
    pass


class ConfigError(DatagenError):
    pass


class RecipeFormatError(DatagenError):
    pass


class ValidationError(DatagenError):
    pass


class MissingFileError(DatagenError):
    pass
