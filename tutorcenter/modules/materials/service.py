from tutorcenter.core.resource import OrderBy, define_resource

DIAGNOSES = define_resource(
    "diagnozy",
    filter_columns=("student_id",),
    order_by=OrderBy("data_testu", ascending=False),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania diagnoz",
        "insert": "Błąd dodawania diagnozy",
        "update": "Błąd aktualizacji diagnozy",
        "delete": "Błąd usuwania diagnozy",
    },
)

BOOKS = define_resource(
    "ksiazki",
    order_by=OrderBy("tytul"),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania książek",
        "insert": "Błąd dodawania książki",
        "update": "Błąd aktualizacji książki",
        "delete": "Błąd usuwania książki",
    },
)

LINKS = define_resource(
    "linki",
    filter_columns=("owner_type", "owner_id"),
    order_by=OrderBy("created_at", ascending=False),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania linków",
        "insert": "Błąd dodawania linku",
        "update": "Błąd aktualizacji linku",
        "delete": "Błąd usuwania linku",
    },
)

BOOK_ASSIGNMENTS = define_resource(
    "uczen_ksiazka",
    filter_columns=("student_id",),
    order_by=OrderBy("created_at", ascending=False),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania przypisań książek",
        "insert": "Błąd dodawania przypisania książki",
        "update": "Błąd aktualizacji przypisania książki",
        "delete": "Błąd usuwania przypisania książki",
    },
)

STUDENT_SUBJECTS = define_resource(
    "przedmiot_ucznia",
    filter_columns=("student_id",),
    order_by=OrderBy("subject"),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania przedmiotów",
        "insert": "Błąd dodawania przedmiotu",
        "update": "Błąd aktualizacji przedmiotu",
        "delete": "Błąd usuwania przedmiotu",
    },
)
