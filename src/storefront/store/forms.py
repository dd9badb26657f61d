"""Forms validating store API payloads."""

from django import forms

from .models import Category, Product


class AddToCartForm(forms.Form):
    product_id = forms.IntegerField(min_value=1)
    quantity = forms.IntegerField(min_value=1, required=False)

    def clean_quantity(self):
        return self.cleaned_data.get("quantity") or 1


class CartQuantityForm(forms.Form):
    quantity = forms.IntegerField(min_value=1)


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ["name", "slug", "description", "image_url"]


class ProductForm(forms.ModelForm):
    class Meta:
        model = Product
        fields = [
            "name",
            "slug",
            "description",
            "price",
            "compare_price",
            "category",
            "image_url",
            "rating",
            "review_count",
            "stock",
            "tags",
            "featured_tag",
            "is_new",
            "is_featured",
            "is_best_seller",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Omitted counters fall back to the model defaults
        for name in ("rating", "review_count", "stock"):
            self.fields[name].required = False

    def clean_tags(self):
        tags = self.cleaned_data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise forms.ValidationError("Tags must be a list of strings")
        return tags

    def clean_rating(self):
        rating = self.cleaned_data.get("rating") or 0
        if not 0 <= rating <= 5:
            raise forms.ValidationError("Rating must be between 0 and 5")
        return rating

    def clean(self):
        cleaned_data = super().clean()
        price = cleaned_data.get("price")
        compare_price = cleaned_data.get("compare_price")
        if price is not None and price < 0:
            self.add_error("price", "Price cannot be negative")
        if compare_price is not None and compare_price < 0:
            self.add_error("compare_price", "Compare-at price cannot be negative")
        return cleaned_data
