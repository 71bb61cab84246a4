class FiledRecipesError(Exception):
    pass


class ConfigError(FiledRecipesError):
    pass


class StorageError(FiledRecipesError):
    pass


class FileFormatError(FiledRecipesError):
    pass


class ValidationError(FiledRecipesError):
    pass


class DuplicateRecipeError(ValidationError):
    pass


class RecipeNotFoundError(FiledRecipesError):
    pass


class RecipeIndexError(FiledRecipesError, IndexError):
    pass
