from core.index.alphabetical import AlphabeticalIndex, AlphabeticalIndexLike
from core.index.classifier import Category, classify, default_categories
from core.index.comments import JavadocCommentRenderer
from core.index.errors import IndexInputError
from core.index.links import MarkdownLinkResolver, ReferenceResolver, RelativePathResolver
from core.index.models import Entity, EntityKind, FilterScript, IndexItem, Row, TableModel, TableTab
from core.index.rows import CommentRenderer, RowRenderer
from core.index.table import TabTableBuilder, build_class_table
