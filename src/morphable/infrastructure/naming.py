"""
Naming collaborator used to derive accessor names and discriminator values.

Wraps the `inflection` package. Any object exposing the same four methods
(singularize, pluralize, classify, underscore) can be passed to the
registration functions instead of the default instance.
"""
import inflection


class Inflector:
    def singularize(self, word: str) -> str:
        return inflection.singularize(word)

    def pluralize(self, word: str) -> str:
        return inflection.pluralize(word)

    def classify(self, word: str) -> str:
        """Turn a collection name into a model class name: 'blog_posts' -> 'BlogPost'."""
        return inflection.camelize(inflection.singularize(word))

    def underscore(self, word: str) -> str:
        return inflection.underscore(word)


# Shared default; Inflector holds no state.
default_naming = Inflector()
