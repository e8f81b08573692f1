from typing import List, Optional

class Family:
    """Represents a family: an optional husband, an optional wife and their children.

    Attributes:
        xref_id (str): GEDCOM cross-reference ID of the FAM record.
        husband (Optional[str]): Husband's individual xref ID.
        wife (Optional[str]): Wife's individual xref ID.
        children (List[str]): Children's individual xref IDs, in record order.
    """

    __slots__ = ['xref_id', 'husband', 'wife', 'children']

    def __init__(self, xref_id: str, husband: Optional[str] = None, wife: Optional[str] = None, children: Optional[List[str]] = None):
        """Initializes a Family instance.

        Args:
            xref_id (str): GEDCOM cross-reference ID.
            husband (str, optional): Husband's xref ID. Defaults to None.
            wife (str, optional): Wife's xref ID. Defaults to None.
            children (List[str], optional): Children's xref IDs. Defaults to empty list.
        """
        self.xref_id: str = xref_id
        self.husband: Optional[str] = husband
        self.wife: Optional[str] = wife
        self.children: List[str] = list(children) if children is not None else []

    @property
    def spouses(self) -> List[str]:
        """Husband then wife, skipping empty slots."""
        return [xref for xref in (self.husband, self.wife) if xref is not None]

    def has_children(self) -> bool:
        return bool(self.children)

    def __str__(self) -> str:
        return f"Family(id={self.xref_id}, husband={self.husband}, wife={self.wife})"

    def __repr__(self) -> str:
        return f"Family(id={self.xref_id!r}, husband={self.husband!r}, wife={self.wife!r}, children={self.children!r})"
