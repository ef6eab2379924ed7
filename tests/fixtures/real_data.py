"""
Real-world test data for FuzzyFuse testing.

Contains realistic examples of:
- Book titles, as typed into a search bar
- Book records with title and author fields
- Random lowercase strings for chunked searches
- Text in non-Latin scripts
"""

from fuzzyfuse import FuseProperty

# Book titles - a small library catalogue
BOOKS = [
    "Angels & Demons",
    "Old Man's War",
    "The Lock Artist",
    "HTML5",
    "Right Ho Jeeves",
    "The Code of the Wooster",
    "Thank You Jeeves",
    "The DaVinci Code",
    "The Silmarillion",
    "Syrup",
    "The Lost Symbol",
    "The Book of Lies",
    "Lamb",
    "Fool",
    "Incompetence",
    "Fat",
    "Colony",
    "Backwards, Red Dwarf",
    "The Grand Design",
    "The Book of Samson",
    "The Preservationist",
    "Fallen",
    "Monster 1959",
]


class Book:
    """Record with a title and an author, searchable by both."""

    def __init__(self, title: str, author: str):
        self.title = title
        self.author = author

    def properties(self):
        return [
            FuseProperty("title", weight=0.3),
            FuseProperty("author", weight=0.7),
        ]

    def lookup(self, key):
        if key == "title":
            return self.title
        if key == "author":
            return self.author
        return None

    def __repr__(self) -> str:
        return f"Book({self.title!r}, {self.author!r})"


BOOK_RECORDS = [
    Book("Old Man's War fiction", "John X"),
    Book("Right Ho Jeeves", "P.D. Mans"),
]

# Random lowercase strings
RANDOM_STRINGS = [
    "tbtlaafazm", "koyqdadlgq", "oimiuidxph", "vpsduaanow", "hebiahfitj",
    "npwhrthmil", "azrwbimxwv", "vcsawdweuu", "rxkratrkmy", "aylajveblo",
    "rrxcujnscn", "qiquwmbjnq", "rnhfquhitv", "fdaerpicep", "uqdxisyife",
    "cjjoczaokp", "rzyqcbsysx", "hbbpyleeld", "agcpswynrh", "yfszgoorut",
    "bgqyspeffj", "izbqqtbicy", "fmtylhheez", "qwqmrjgsof", "ukxctnwjoa",
    "dudeqiiywj", "tkzoipxcwj", "ksceoqifgh", "ibganykxkk", "xjcmlkipmx",
    "lqlymvienh", "oixeifwozn", "rcliwhskci", "egccrviiht", "phfyrggvns",
    "wyppwykhlr", "jzbdxsvtnh", "zliedzschj", "hqvvdzmosr", "xkmcraghkf",
    "blyvvzlfvn", "snyozhntqh", "evlondyrqy", "sixjfceouu", "jtkryuwqug",
    "qceukaadkw", "sadaexvhps", "ikxraiifbo", "ilopqywxxd", "dcabhorpap",
]

# Strings with no "f" in them, in scripts that need more than one byte per character
MULTIBYTE_STRINGS = [
    "®∮ℕ⊆ℕ₀⊂ℤℚ",
    "😊🥺😉😍😘😚",
    "⡍⠜⠇⠑⠹ ⠺⠁⠎",
    "გთხოვთ",
    "ıntəˈnæʃənəl",
    "γνωρίζω ἀπὸ",
    "コンニチハ",
]
