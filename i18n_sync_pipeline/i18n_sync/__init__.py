from .flatten import FlatEntry, Leaf, Node, flatten_content, flatten_keys_with_values, to_translation_value
from .state import (
    KeyMeta, LocaleEntry, State, StaleEntry, create_state, diff_state, get_languages_info,
    is_stale, load_or_create_state, load_state, save_state, touch,
)
from .reconcile import check_status, initialize_state, reconcile_state, sync_state
from .orchestrator import TranslationOrchestrator, TranslationRun, save_ai_translations
from .keys_ts import generate_keys, save_keys

__version__ = "0.1.0"
