from __future__ import annotations

from app.domain.entities.product import Product


SAMPLE_PRODUCTS: list[Product] = [
    Product(
        sku="TSHIRT-001",
        name="Premium Cotton T-Shirt",
        name_ur="پریمیم کاٹن ٹی شرٹ",
        description="High-quality 100% cotton t-shirt available in multiple colors. Comfortable fit for everyday wear.",
        description_ur="اعلیٰ معیار کی سو فیصد کاٹن ٹی شرٹ، مختلف رنگوں میں دستیاب۔ روزمرہ استعمال کے لیے آرام دہ۔",
        price=1299,
        image_url="https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800",
        stock=50,
        category="T-Shirts",
        category_ur="ٹی شرٹس",
    ),
    Product(
        sku="JEANS-001",
        name="Slim Fit Denim Jeans",
        name_ur="سلم فٹ ڈینم جینز",
        description="Stylish slim fit jeans made from premium denim fabric. Perfect for casual and semi-formal occasions.",
        description_ur="پریمیم ڈینم کپڑے سے بنی سلم فٹ جینز۔ عام اور نیم رسمی مواقع کے لیے بہترین۔",
        price=2499,
        image_url="https://images.unsplash.com/photo-1542272604-787c3835535d?w=800",
        stock=30,
        category="Jeans",
        category_ur="جینز",
    ),
    Product(
        sku="SHOES-001",
        name="Casual Sneakers",
        name_ur="کیژول سنیکرز",
        description="Comfortable and durable sneakers for daily use. Available in sizes 40-44.",
        description_ur="روزانہ استعمال کے لیے آرام دہ اور پائیدار سنیکرز۔ سائز 40 سے 44 میں دستیاب۔",
        price=3999,
        image_url="https://images.unsplash.com/photo-1549298916-b41d501d3772?w=800",
        stock=25,
        category="Shoes",
        category_ur="جوتے",
    ),
    Product(
        sku="WATCH-001",
        name="Stainless Steel Watch",
        name_ur="اسٹین لیس اسٹیل گھڑی",
        description="Elegant stainless steel watch with water resistance. Perfect gift for special occasions.",
        description_ur="واٹر ریزسٹنٹ خوبصورت اسٹین لیس اسٹیل گھڑی۔ خاص مواقع کے لیے بہترین تحفہ۔",
        price=4999,
        image_url="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=800",
        stock=15,
        category="Watches",
        category_ur="گھڑیاں",
    ),
    Product(
        sku="BAG-001",
        name="Leather Backpack",
        name_ur="چمڑے کا بیگ",
        description="Premium leather backpack with laptop compartment. Ideal for office and travel.",
        description_ur="لیپ ٹاپ خانے کے ساتھ پریمیم چمڑے کا بیگ۔ دفتر اور سفر کے لیے مثالی۔",
        price=5999,
        image_url="https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=800",
        stock=20,
        category="Bags",
        category_ur="بیگز",
    ),
]
