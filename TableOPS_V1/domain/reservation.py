from pydantic import BaseModel


class Reservation(BaseModel):
    """One booked seating.

    Instances are owned by the engine; callers only ever receive copies.
    """

    id: str
    customer_name: str
    phone_number: str
    party_size: int
    date: str
    time: str
    table_number: int  # 0-based, shown to users as table_number + 1

    def describe(self) -> str:
        """One-line summary used by the reservation listings."""
        return (
            f"ID: {self.id}, Name: {self.customer_name}, "
            f"Contact: {self.phone_number}, Party Size: {self.party_size}, "
            f"Date: {self.date}, Time: {self.time}, Table: {self.table_number + 1}"
        )
