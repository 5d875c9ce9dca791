"""Repository for Customer database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from waaranders.models.customer import Customer
from waaranders.database.models import CustomerDB

logger = logging.getLogger(__name__)


class CustomerRepository:
    """Repository for Customer database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, customer: Customer) -> Customer:
        """Create a new customer."""
        try:
            customer_db = CustomerDB.from_pydantic(customer)
            self.db.add(customer_db)
            self.db.commit()
            self.db.refresh(customer_db)
            logger.debug(f"Created customer {customer.id}: {customer.name}")
            return customer_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create customer {customer.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, customer_id: str) -> Optional[Customer]:
        """Get customer by ID (archived customers included)."""
        customer_db = self.db.query(CustomerDB).filter(CustomerDB.id == customer_id).first()
        return customer_db.to_pydantic() if customer_db else None

    def list_active(self) -> List[Customer]:
        """Active customers ordered by name."""
        customers_db = self.db.query(CustomerDB).filter(
            CustomerDB.active.is_(True),
        ).order_by(CustomerDB.name).all()
        return [c.to_pydantic() for c in customers_db]

    def update(self, customer: Customer) -> Customer:
        """Update an existing customer."""
        customer_db = self.db.query(CustomerDB).filter(CustomerDB.id == customer.id).first()
        if not customer_db:
            raise ValueError(f"Customer {customer.id} not found")

        customer_db.name = customer.name
        customer_db.contact_name = customer.contact_name
        customer_db.contact_phone = customer.contact_phone
        customer_db.address = customer.address
        customer_db.target_group = customer.target_group
        customer_db.active = customer.active
        customer_db.updated_at = customer.updated_at

        try:
            self.db.commit()
            self.db.refresh(customer_db)
            logger.debug(f"Updated customer {customer.id}: {customer.name}")
            return customer_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update customer {customer.id}: {type(e).__name__}: {str(e)}")
            raise

    def archive(self, customer_id: str) -> bool:
        """Archive a customer: inactive, with an archive timestamp."""
        customer_db = self.db.query(CustomerDB).filter(CustomerDB.id == customer_id).first()
        if not customer_db:
            return False

        try:
            now = datetime.utcnow()
            customer_db.active = False
            customer_db.archived_at = now
            customer_db.updated_at = now
            self.db.commit()
            logger.debug(f"Archived customer {customer_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to archive customer {customer_id}: {type(e).__name__}: {str(e)}")
            raise
