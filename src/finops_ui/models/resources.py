"""
Registry of the collections the UI can list.

Each ``ResourceSpec`` carries everything the generic list machinery needs to
talk to one REST resource and render it as a table: endpoint paths, default
page size and sort, the columns the server accepts for sorting, and the table
columns with their display kind.
"""

from dataclasses import dataclass, field

from finops_ui import config
from finops_ui.models.common import SORT_DESC, SortConfig

# Column display kinds understood by ``utils.formatting.format_cell``.
TEXT = "text"
AMOUNT = "amount"
DATE = "date"
DATETIME = "datetime"
LEDGER_TYPE = "ledger_type"
PERCENT = "percent"
STATUS = "status"
COUNT = "count"


@dataclass(frozen=True, slots=True)
class Column:
    key: str
    label: str
    kind: str = TEXT
    sortable: bool = False


@dataclass(frozen=True, slots=True)
class ResourceSpec:
    """
    Description of one listable REST resource.

    Attributes:
        name: Registry key, e.g. ``"transactions"``.
        label: Singular display label used in messages.
        plural: Plural display label used in headings.
        base_path: Resource root, e.g. ``/api/v1/transactions``.
        list_path: Path of the paginated list endpoint.
        default_sort: Sort used before the user picks one.
        default_limit: Page size.
        sort_columns: Columns the server accepts for ``sort_by``.
        created_column: Column holding creation time.
        columns: Table columns in display order.
        edit_field: Field the inline edit dialog changes, ``None`` if not editable.
        search_placeholder: Placeholder for the search input.
        supports_create: Whether ``POST base_path`` exists.
        supports_update: Whether ``PUT base_path`` exists.
        supports_delete: Whether ``DELETE base_path`` exists.
        supports_autocomplete: Whether ``GET base_path/autocomplete`` exists.
    """

    name: str
    label: str
    plural: str
    base_path: str
    default_sort: SortConfig
    default_limit: int
    sort_columns: tuple[str, ...]
    created_column: str
    columns: tuple[Column, ...] = ()
    list_path: str = ""
    edit_field: str | None = None
    search_placeholder: str = "Search..."
    supports_create: bool = True
    supports_update: bool = True
    supports_delete: bool = True
    supports_autocomplete: bool = False
    extra_paths: dict[str, str] = field(default_factory=dict)

    @property
    def paginated_path(self) -> str:
        return self.list_path or f"{self.base_path}/paginated"

    @property
    def autocomplete_path(self) -> str:
        return f"{self.base_path}/autocomplete"

    def path(self, key: str, **kwargs) -> str:
        """Format one of ``extra_paths`` with ``kwargs``."""
        return self.extra_paths[key].format(**kwargs)

    def is_sortable(self, column: str) -> bool:
        return column in self.sort_columns

    def created_desc(self, sort: SortConfig) -> bool:
        """Whether ``sort`` shows newest records first."""
        return sort.sort_by == self.created_column and sort.sort_order == SORT_DESC


def _cols(*columns: Column, sort_columns: tuple[str, ...]) -> tuple[Column, ...]:
    return tuple(
        Column(c.key, c.label, c.kind, sortable=c.key in sort_columns) for c in columns
    )


_V1 = config.API_V1_PREFIX
_V2 = config.PROFILER_PREFIX

_TRANSACTION_SORT = ("create_date", "transaction_amount", "client_name", "bank_name", "card_name")
_CLIENT_SORT = ("name", "email", "contact", "create_date", "transaction_count")
_NAMED_SORT = ("name", "create_date", "transaction_count")
_PROFILER_CLIENT_SORT = ("name", "created_at", "profile_count")
_PROFILER_BANK_SORT = ("bank_name", "created_at", "profile_count")
_PROFILE_SORT = ("created_at", "client_name", "bank_name", "remaining_balance", "status")
_PROFILER_TXN_SORT = ("created_at", "amount", "transaction_type")

_PROFILE_COLUMNS = _cols(
    Column("client_name", "Client"),
    Column("bank_name", "Bank"),
    Column("credit_card_number", "Card"),
    Column("pre_planned_deposit_amount", "Planned", AMOUNT),
    Column("current_balance", "Balance", AMOUNT),
    Column("total_withdrawn_amount", "Withdrawn", AMOUNT),
    Column("remaining_balance", "Remaining", AMOUNT),
    Column("status", "Status", STATUS),
    Column("created_at", "Created", DATETIME),
    sort_columns=_PROFILE_SORT,
)

RESOURCES: dict[str, ResourceSpec] = {
    spec.name: spec
    for spec in (
        ResourceSpec(
            name="transactions",
            label="Transaction",
            plural="Transactions",
            base_path=f"{_V1}/transactions",
            default_sort=SortConfig("create_date", SORT_DESC),
            default_limit=config.PAGE_SIZE,
            sort_columns=_TRANSACTION_SORT,
            created_column="create_date",
            columns=_cols(
                Column("transaction_type", "Type", LEDGER_TYPE),
                Column("client_name", "Client"),
                Column("transaction_amount", "Amount", AMOUNT),
                Column("widthdraw_charges", "Charges %", PERCENT),
                Column("bank_name", "Bank"),
                Column("card_name", "Card"),
                Column("remark", "Remark"),
                Column("create_date", "Date", DATE),
                sort_columns=_TRANSACTION_SORT,
            ),
            edit_field="remark",
            search_placeholder="Search client, bank, card or remark...",
            extra_paths={"report": f"{_V1}/transactions/report"},
        ),
        ResourceSpec(
            name="clients",
            label="Client",
            plural="Clients",
            base_path=f"{_V1}/clients",
            default_sort=SortConfig("create_date", SORT_DESC),
            default_limit=config.PAGE_SIZE,
            sort_columns=_CLIENT_SORT,
            created_column="create_date",
            columns=_cols(
                Column("name", "Name"),
                Column("email", "Email"),
                Column("contact", "Contact"),
                Column("address", "Address"),
                Column("transaction_count", "Transactions", COUNT),
                Column("create_date", "Created", DATE),
                sort_columns=_CLIENT_SORT,
            ),
            edit_field="name",
            search_placeholder="Search clients...",
            supports_autocomplete=True,
        ),
        ResourceSpec(
            name="banks",
            label="Bank",
            plural="Banks",
            base_path=f"{_V1}/banks",
            default_sort=SortConfig("create_date", SORT_DESC),
            default_limit=config.PAGE_SIZE,
            sort_columns=_NAMED_SORT,
            created_column="create_date",
            columns=_cols(
                Column("name", "Name"),
                Column("transaction_count", "Transactions", COUNT),
                Column("create_date", "Created", DATE),
                sort_columns=_NAMED_SORT,
            ),
            edit_field="name",
            search_placeholder="Search banks...",
            supports_autocomplete=True,
        ),
        ResourceSpec(
            name="cards",
            label="Card",
            plural="Cards",
            base_path=f"{_V1}/cards",
            default_sort=SortConfig("create_date", SORT_DESC),
            default_limit=config.PAGE_SIZE,
            sort_columns=_NAMED_SORT,
            created_column="create_date",
            columns=_cols(
                Column("name", "Name"),
                Column("transaction_count", "Transactions", COUNT),
                Column("create_date", "Created", DATE),
                sort_columns=_NAMED_SORT,
            ),
            edit_field="name",
            search_placeholder="Search cards...",
            supports_autocomplete=True,
        ),
        ResourceSpec(
            name="profiler_clients",
            label="Client",
            plural="Profiler Clients",
            base_path=f"{_V2}/clients",
            default_sort=SortConfig("created_at", SORT_DESC),
            default_limit=config.PROFILER_PAGE_SIZE,
            sort_columns=_PROFILER_CLIENT_SORT,
            created_column="created_at",
            columns=_cols(
                Column("name", "Name"),
                Column("mobile_number", "Mobile"),
                Column("email", "Email"),
                Column("aadhaar_card_number", "Aadhaar"),
                Column("profile_count", "Profiles", COUNT),
                Column("created_at", "Created", DATETIME),
                sort_columns=_PROFILER_CLIENT_SORT,
            ),
            edit_field="notes",
            search_placeholder="Search profiler clients...",
            supports_autocomplete=True,
        ),
        ResourceSpec(
            name="profiler_banks",
            label="Bank",
            plural="Profiler Banks",
            base_path=f"{_V2}/banks",
            default_sort=SortConfig("created_at", SORT_DESC),
            default_limit=config.PROFILER_PAGE_SIZE,
            sort_columns=_PROFILER_BANK_SORT,
            created_column="created_at",
            columns=_cols(
                Column("bank_name", "Bank"),
                Column("profile_count", "Profiles", COUNT),
                Column("created_at", "Created", DATETIME),
                sort_columns=_PROFILER_BANK_SORT,
            ),
            edit_field="bank_name",
            search_placeholder="Search profiler banks...",
            supports_autocomplete=True,
        ),
        ResourceSpec(
            name="profiler_profiles",
            label="Profile",
            plural="Profiles",
            base_path=f"{_V2}/profiles",
            default_sort=SortConfig("created_at", SORT_DESC),
            default_limit=config.PROFILER_PAGE_SIZE,
            sort_columns=_PROFILE_SORT,
            created_column="created_at",
            columns=_PROFILE_COLUMNS,
            edit_field="notes",
            search_placeholder="Search by client, bank or card...",
            supports_autocomplete=True,
            extra_paths={
                "mark_done": f"{_V2}/profiles/mark-done",
            },
        ),
        ResourceSpec(
            name="profiler_dashboard",
            label="Profile",
            plural="Active Profiles",
            base_path=f"{_V2}/profiles",
            list_path=f"{_V2}/profiles/dashboard",
            default_sort=SortConfig("created_at", SORT_DESC),
            default_limit=config.PROFILER_PAGE_SIZE,
            sort_columns=_PROFILE_SORT,
            created_column="created_at",
            columns=_PROFILE_COLUMNS,
            search_placeholder="Search active profiles...",
            supports_create=False,
            supports_update=False,
            supports_delete=False,
            extra_paths={"mark_done": f"{_V2}/profiles/mark-done"},
        ),
        ResourceSpec(
            name="profiler_transactions",
            label="Transaction",
            plural="Profiler Transactions",
            base_path=f"{_V2}/transactions",
            default_sort=SortConfig("created_at", SORT_DESC),
            default_limit=config.PROFILER_PAGE_SIZE,
            sort_columns=_PROFILER_TXN_SORT,
            created_column="created_at",
            columns=_cols(
                Column("transaction_type", "Type", STATUS),
                Column("client_name", "Client"),
                Column("bank_name", "Bank"),
                Column("amount", "Amount", AMOUNT),
                Column("withdraw_charges_percentage", "Charges %", PERCENT),
                Column("withdraw_charges_amount", "Charges", AMOUNT),
                Column("notes", "Notes"),
                Column("created_at", "Date", DATETIME),
                sort_columns=_PROFILER_TXN_SORT,
            ),
            search_placeholder="Search by client, bank or notes...",
            supports_update=False,
            extra_paths={
                "deposit": f"{_V2}/transactions/deposit",
                "withdraw": f"{_V2}/transactions/withdraw",
                "summary": f"{_V2}/transactions/profile/{{profile_id}}/summary",
                "export_pdf": f"{_V2}/transactions/profile/{{profile_id}}/export-pdf",
            },
        ),
    )
}


def get_resource(name: str) -> ResourceSpec:
    """Look up a resource by name."""
    try:
        return RESOURCES[name]
    except KeyError:
        available = ", ".join(sorted(RESOURCES))
        raise ValueError(f"Unknown resource {name!r}. Available: {available}") from None
