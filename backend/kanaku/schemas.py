from typing import List, Optional
from datetime import datetime, date
from pydantic import BaseModel, Field, EmailStr, field_validator

from kanaku.models.enums import (
    UserRole,
    EmployeeStatus,
    PaymentMethod,
    PaymentStatus,
    StockMovementType,
    ReferenceType,
    PurchaseOrderStatus,
)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Auth ---
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=200)


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    is_active: bool = True

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str


# --- Shop ---
class ShopBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    name_tamil: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gstin: Optional[str] = Field(None, max_length=15)
    logo_url: Optional[str] = None

    @field_validator("name_tamil", "address", "phone", "email", "gstin", "logo_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class ShopCreate(ShopBase):
    pass


class ShopUpdate(ShopBase):
    pass


class ShopResponse(ShopBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ShopAccessResponse(ShopResponse):
    role: UserRole
    is_owner: bool


# --- Employee ---
class EmployeeInvite(BaseModel):
    email: EmailStr
    role: UserRole = UserRole.CASHIER


class EmployeeRoleUpdate(BaseModel):
    role: UserRole


class EmployeeResponse(BaseModel):
    id: int
    shop_id: int
    user_id: Optional[int] = None
    invited_email: str
    role: UserRole
    status: EmployeeStatus
    created_at: datetime
    user: Optional[UserResponse] = None

    class Config:
        from_attributes = True


# --- Category ---
class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    name_tamil: Optional[str] = None
    parent_id: Optional[int] = None
    image_url: Optional[str] = None
    sort_order: int = 0

    @field_validator("name_tamil", "image_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class CategoryResponse(CategoryBase):
    id: int
    shop_id: int

    class Config:
        from_attributes = True


class CategoryTreeNode(CategoryResponse):
    children: List["CategoryTreeNode"] = []


CategoryTreeNode.model_rebuild()


# --- Brand ---
class BrandBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    name_tamil: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name_tamil", "image_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class BrandCreate(BrandBase):
    pass


class BrandResponse(BrandBase):
    id: int
    shop_id: int

    class Config:
        from_attributes = True


# --- Price type ---
class PriceTypeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    is_default: bool = False


class PriceTypeCreate(PriceTypeBase):
    pass


class PriceTypeResponse(PriceTypeBase):
    id: int
    shop_id: int

    class Config:
        from_attributes = True


# --- Supplier ---
class SupplierBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    gstin: Optional[str] = Field(None, max_length=15)
    notes: Optional[str] = None

    @field_validator("contact_person", "phone", "email", "address", "gstin", "notes", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class SupplierCreate(SupplierBase):
    pass


class SupplierResponse(SupplierBase):
    id: int
    shop_id: int
    created_at: datetime

    class Config:
        from_attributes = True


# --- Product ---
class ProductPriceIn(BaseModel):
    price_type_id: int
    selling_price: float


class ProductPriceResponse(BaseModel):
    price_type_id: int
    selling_price: float

    class Config:
        from_attributes = True


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    name_tamil: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    brand_id: Optional[int] = None
    sku: Optional[str] = Field(None, max_length=64)
    barcode: Optional[str] = Field(None, max_length=64)
    mrp: float = Field(0, ge=0)
    cost_price: float = Field(0, ge=0)
    default_selling_price: float = Field(0, ge=0)
    gst_percent: float = Field(0, ge=0, le=100)
    hsn_code: Optional[str] = Field(None, max_length=16)
    unit: str = Field("pcs", min_length=1, max_length=20)
    track_inventory: bool = False
    stock_quantity: float = 0
    low_stock_threshold: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_active: bool = True

    @field_validator("name_tamil", "description", "sku", "barcode", "hsn_code", "image_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class ProductCreate(ProductBase):
    prices: List[ProductPriceIn] = []


class ProductUpdate(ProductBase):
    prices: List[ProductPriceIn] = []


class ProductActiveUpdate(BaseModel):
    is_active: bool


class ProductResponse(ProductBase):
    id: int
    shop_id: int
    low_stock_threshold: float = 0
    category: Optional[CategoryResponse] = None
    brand: Optional[BrandResponse] = None
    prices: List[ProductPriceResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# --- Stock ---
class StockAdjustment(BaseModel):
    product_id: int
    type: StockMovementType = StockMovementType.ADJUSTMENT
    quantity: float
    notes: Optional[str] = None

    @field_validator("type")
    @classmethod
    def manual_types_only(cls, value):
        if value not in (StockMovementType.ADJUSTMENT, StockMovementType.RETURN):
            raise ValueError("Manual stock changes must be an adjustment or a return")
        return value

    @field_validator("quantity")
    @classmethod
    def non_zero(cls, value):
        if value == 0:
            raise ValueError("Please enter a valid quantity")
        return value


class StockMovementResponse(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    type: StockMovementType
    quantity: float
    quantity_before: float
    quantity_after: float
    reference_type: Optional[ReferenceType] = None
    reference_id: Optional[int] = None
    notes: Optional[str] = None
    created_by: int
    created_at: datetime

    class Config:
        from_attributes = True


# --- Purchase order ---
class PurchaseOrderItemCreate(BaseModel):
    product_id: int
    quantity: float = Field(..., gt=0)
    unit_cost: Optional[float] = Field(None, ge=0)


class PurchaseOrderCreate(BaseModel):
    supplier_id: int
    expected_date: Optional[date] = None
    notes: Optional[str] = None
    items: List[PurchaseOrderItemCreate] = []


class PurchaseOrderStatusUpdate(BaseModel):
    status: PurchaseOrderStatus


class ReceiveItem(BaseModel):
    item_id: int
    quantity: float = Field(..., gt=0)


class PurchaseOrderReceive(BaseModel):
    items: Optional[List[ReceiveItem]] = None  # None receives everything outstanding
    notes: Optional[str] = None


class PurchaseOrderItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    quantity_ordered: float
    quantity_received: float
    unit_cost: float
    total: float

    class Config:
        from_attributes = True


class PurchaseOrderResponse(BaseModel):
    id: int
    shop_id: int
    supplier_id: int
    supplier_name: Optional[str] = None
    po_number: str
    status: PurchaseOrderStatus
    order_date: date
    expected_date: Optional[date] = None
    received_date: Optional[datetime] = None
    subtotal: float
    tax_amount: float
    total_amount: float
    notes: Optional[str] = None
    created_by: int
    created_at: datetime
    items: List[PurchaseOrderItemResponse] = []

    class Config:
        from_attributes = True


# --- Billing ---
class BillItemCreate(BaseModel):
    product_id: int
    quantity: float = Field(..., gt=0, allow_inf_nan=False)
    unit_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)  # None means price list price


class BillCreate(BaseModel):
    items: List[BillItemCreate] = []
    price_type_id: Optional[int] = None
    discount_percent: float = Field(0, allow_inf_nan=False)
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    notes: Optional[str] = None

    @field_validator("customer_name", "customer_phone", "customer_address", "notes", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return _blank_to_none(value)


class BillItemResponse(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: str
    product_name_tamil: Optional[str] = None
    sku: Optional[str] = None
    hsn_code: Optional[str] = None
    quantity: float
    unit: str
    unit_price: float
    discount_amount: float
    taxable_amount: float
    gst_percent: float
    gst_amount: float
    total: float

    class Config:
        from_attributes = True


class BillResponse(BaseModel):
    id: int
    shop_id: int
    bill_number: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    price_type_id: Optional[int] = None
    subtotal: float
    discount_amount: float
    discount_percent: float
    taxable_amount: float
    gst_amount: float
    total: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    notes: Optional[str] = None
    created_by: int
    created_at: datetime
    items: List[BillItemResponse] = []

    class Config:
        from_attributes = True


class BillSummary(BaseModel):
    id: int
    bill_number: str
    customer_name: Optional[str] = None
    total: float
    payment_method: PaymentMethod
    created_at: datetime

    class Config:
        from_attributes = True


class ReceiptResponse(BaseModel):
    bill_id: int
    bill_number: str
    width: int
    text: str


# --- Dashboard / reports ---
class LowStockProduct(BaseModel):
    id: int
    name: str
    stock_quantity: float
    low_stock_threshold: float

    class Config:
        from_attributes = True


class DashboardStats(BaseModel):
    today_sales: float
    today_bill_count: int
    month_sales: float
    month_bill_count: int
    low_stock_count: int
    total_products: int
    low_stock_products: List[LowStockProduct] = []
    recent_bills: List[BillSummary] = []
